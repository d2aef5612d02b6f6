"""Owner and pet registry backed by SQLite."""

__version__ = "0.1.0"
