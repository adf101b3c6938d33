"""Internal packages for ListKit."""

__version__ = "0.1.0"
