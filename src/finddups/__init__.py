"""Find files with identical contents across directory trees."""

__version__ = "0.1.0"
