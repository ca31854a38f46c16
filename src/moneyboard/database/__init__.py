"""Database layer for moneyboard application."""

from moneyboard.database.base import Database
from moneyboard.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
