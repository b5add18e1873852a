"""Relational project store."""

from src.storage.sqlite_manager import BootstrapReport, SQLiteManager

__all__ = ["BootstrapReport", "SQLiteManager"]
