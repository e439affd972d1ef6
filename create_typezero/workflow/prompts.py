"""Interactive prompt boundary.

The workflow only needs two kinds of question: free text with an optional
validator, and a pick-one list.  Both return either the answer or
:data:`CANCELLED`; aborting a prompt is a normal result, never an exception.

:class:`RichPrompter` is the terminal implementation built on ``rich.prompt``.
Tests substitute any object that satisfies :class:`Prompter`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Generic, Protocol, Sequence, TextIO, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from create_typezero.utils import console as default_console

T = TypeVar("T")

# A validator returns True to accept, or an error message to show before re-asking.
Validator = Callable[[str], "bool | str"]


class _Question(Prompt):
    # messages already end with their own punctuation
    prompt_suffix = " "


class Cancellation(enum.Enum):
    """Result marker for a prompt the user aborted (Ctrl-C / end of input)."""

    CANCELLED = "cancelled"


CANCELLED = Cancellation.CANCELLED


@dataclass(frozen=True)
class Choice(Generic[T]):
    """One entry of a select prompt."""

    title: str
    value: T


class Prompter(Protocol):
    """Capability that asks the user a question."""

    async def text(
        self,
        message: str,
        *,
        default: str = "",
        validate: Validator | None = None,
    ) -> str | Cancellation:
        ...

    async def select(
        self,
        message: str,
        choices: Sequence[Choice[T]],
        *,
        initial: int = 0,
    ) -> T | Cancellation:
        ...


class RichPrompter:
    """Terminal prompter backed by :class:`rich.prompt.Prompt`.

    Args:
        console: Console used for rendering; defaults to the shared console.
        stream: Optional input stream read instead of ``stdin``.
    """

    def __init__(self, console: Console | None = None, stream: TextIO | None = None) -> None:
        self.console = console or default_console
        self.stream = stream

    def _ask(self, message: str, **kwargs) -> str | Cancellation:
        try:
            return _Question.ask(
                escape(message), console=self.console, stream=self.stream, **kwargs
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return CANCELLED

    async def text(
        self,
        message: str,
        *,
        default: str = "",
        validate: Validator | None = None,
    ) -> str | Cancellation:
        while True:
            answer = self._ask(message, default=default, show_default=bool(default))
            if answer is CANCELLED:
                return CANCELLED
            # stream input keeps the bare newline instead of falling back
            if not answer and default:
                answer = default
            if validate is None:
                return answer
            verdict = validate(answer)
            if verdict is True:
                return answer
            error = verdict if isinstance(verdict, str) else "Invalid value"
            self.console.print(f"[red]{escape(error)}[/red]")

    async def select(
        self,
        message: str,
        choices: Sequence[Choice[T]],
        *,
        initial: int = 0,
    ) -> T | Cancellation:
        if not choices:
            raise ValueError("select() needs at least one choice")
        self.console.print(escape(message))
        for index, choice in enumerate(choices, start=1):
            self.console.print(f"  {index}) {escape(choice.title)}")

        keys = [str(index) for index in range(1, len(choices) + 1)]
        answer = self._ask("Select", choices=keys, default=keys[initial])
        if answer is CANCELLED:
            return CANCELLED
        return choices[int(answer) - 1].value
