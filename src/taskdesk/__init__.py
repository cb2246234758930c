"""Task tracking backend with pluggable JSON and SQLite storage."""

__version__ = "0.1.0"
