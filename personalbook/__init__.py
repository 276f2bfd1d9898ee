"""Personal Book - personal profile management service."""

__version__ = "1.0.0"
