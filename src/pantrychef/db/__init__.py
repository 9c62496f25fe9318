"""SQLite storage for profiles, pantry, meal log and weight history."""

from pantrychef.db.connection import DatabaseConnection

__all__ = ["DatabaseConnection"]
