"""Core services exports."""

from .database import DbSessionService
from .users_resource import UsersResource

__all__ = ["DbSessionService", "UsersResource"]
