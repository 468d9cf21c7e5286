"""Coffee menu and order persistence on SQLite."""

__version__ = "0.1.0"
