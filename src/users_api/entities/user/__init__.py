"""User entity module.

- User: Domain entity returned by the API
- UserCreate / UserUpdate: Validated request payloads
- UserTable: Database persistence model
"""

from .entity import User, UserCreate, UserUpdate
from .table import UserTable

__all__ = ["User", "UserCreate", "UserUpdate", "UserTable"]
