"""tnote: command-line notes and todos backed by SQLite."""

__version__ = "1.0.0"
