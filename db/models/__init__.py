"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.menu_item import MenuItem

__all__ = ["MenuItem"]
