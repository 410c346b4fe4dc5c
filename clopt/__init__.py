"""Command-line option parser built on option blocks with callbacks, with a demo program."""

__version__ = "1.0.0"
__all__ = ["options", "parser", "demo"]