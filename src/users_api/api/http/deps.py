"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.users_api.api.http.app_data import ApplicationDependencies
from src.users_api.core.services import DbSessionService, UsersResource


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies wired at startup."""
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    return get_app_dependencies(request).database_service


def get_users_resource(request: Request) -> UsersResource:
    """Get the users resource instance."""
    return get_app_dependencies(request).users_resource
