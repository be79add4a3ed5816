"""CLI Commander: run registered administrative commands over HTTP."""

__version__ = "0.1.0"
