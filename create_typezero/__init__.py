"""create-typezero -- scaffold a new TypeZero project from the published template."""

__version__ = "0.1.0"
