"""A terminal pager for text containing ANSI color codes."""

__version__ = "0.1.0"
