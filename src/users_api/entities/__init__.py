"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model and request payload models
- table.py: Database persistence model
"""

from .user import User, UserCreate, UserTable, UserUpdate

__all__ = ["User", "UserCreate", "UserTable", "UserUpdate"]
