"""AI ghost story generator."""

__version__ = "0.1.0"
