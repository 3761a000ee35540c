"""Database initialization script."""

from src.users_api.core.services import DbSessionService
from src.users_api.runtime.context import get_config


def init_db(database_service: DbSessionService | None = None) -> None:
    """Create all database tables."""
    service = database_service or DbSessionService(get_config())
    service.create_all()


if __name__ == "__main__":
    init_db()
