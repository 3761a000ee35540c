from dataclasses import dataclass

from src.users_api.core.services import DbSessionService, UsersResource
from src.users_api.core.storage import UserStore
from src.users_api.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    user_store: UserStore
    users_resource: UsersResource


def build_dependencies(
    config: ConfigData, database_service: DbSessionService | None = None
) -> ApplicationDependencies:
    """Wire the store client and resource once per process."""
    database_service = database_service or DbSessionService(config)
    user_store = UserStore(database_service)
    users_resource = UsersResource(
        user_store, timeout=config.app.request_timeout_seconds
    )
    return ApplicationDependencies(
        database_service=database_service,
        user_store=user_store,
        users_resource=users_resource,
    )
