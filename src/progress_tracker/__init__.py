"""Single-line progress indicators for command-line processes."""

__version__ = "0.3.0"
