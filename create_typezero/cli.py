"""Command line entry point for ``create-typezero``.

Usage::

    create-typezero
    create-typezero my-app
    create-typezero . --template typezero
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Sequence

from create_typezero.config import ScaffoldConfig
from create_typezero.orchestrator import ScaffoldOrchestrator
from create_typezero.scaffolder import FetchError, MaterializationError, TemplateProvider
from create_typezero.utils import console, print_cancelled, print_error
from create_typezero.workflow import Prompter, RichPrompter

HELP_MESSAGE = """\
Usage: create-typezero [DIRECTORY]

Create a new TypeZero project.
With no arguments, start the CLI in interactive mode."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="create-typezero", add_help=False)
    parser.add_argument("directory", nargs="?", default=None)
    parser.add_argument("-h", "--help", action="store_true", default=False)
    parser.add_argument("-t", "--template", default=None)
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    prompter: Prompter | None = None,
    provider: TemplateProvider | None = None,
) -> None:
    """CLI entry point for ``create-typezero`` and ``python -m create_typezero``."""
    parser = build_parser()
    args, _unknown = parser.parse_known_args(argv)

    if args.help:
        console.print(HELP_MESSAGE, markup=False)
        return

    config = ScaffoldConfig.from_env(template=args.template)
    orchestrator = ScaffoldOrchestrator(
        config,
        prompter or RichPrompter(),
        provider or TemplateProvider(config),
    )

    try:
        asyncio.run(orchestrator.run(args.directory))
    except KeyboardInterrupt:
        print_cancelled()
    except (FetchError, MaterializationError) as exc:
        print_error(str(exc))
        sys.exit(1)


if __name__ == "__main__":
    main()
