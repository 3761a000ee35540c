"""Users API router: list, get, create and update."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from starlette.responses import JSONResponse

from src.users_api.api.http.deps import get_users_resource
from src.users_api.api.http.responses import to_response
from src.users_api.core.services import UsersResource

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(
    resource: UsersResource = Depends(get_users_resource),
) -> JSONResponse:
    """List all users."""
    return to_response(await resource.list_users())


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    resource: UsersResource = Depends(get_users_resource),
) -> JSONResponse:
    """Get a user by numeric ID."""
    return to_response(await resource.get_by_id(user_id))


@router.post("")
async def create_user(
    body: Any = Body(default=None),
    resource: UsersResource = Depends(get_users_resource),
) -> JSONResponse:
    """Create a user from ``{username, email}``."""
    return to_response(await resource.create(body))


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    body: Any = Body(default=None),
    resource: UsersResource = Depends(get_users_resource),
) -> JSONResponse:
    """Update the supplied fields of a user."""
    return to_response(await resource.update(user_id, body))
