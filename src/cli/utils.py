"""Shared helpers for CLI commands."""

from rich.console import Console

from src.users_api.core.services import DbSessionService, UsersResource
from src.users_api.core.storage import UserStore
from src.users_api.runtime.context import get_config

console = Console()


def get_database_service() -> DbSessionService:
    return DbSessionService(get_config())


def get_users_resource() -> UsersResource:
    config = get_config()
    store = UserStore(get_database_service())
    return UsersResource(store, timeout=config.app.request_timeout_seconds)
