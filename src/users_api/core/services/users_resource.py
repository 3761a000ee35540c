"""Request handler set bound to the ``users`` table."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

from src.users_api.core.result import ErrorKind, Failure, Result, Success
from src.users_api.core.storage import StoreError, UserStore
from src.users_api.core.validation import (
    ID_NOT_NUMERIC,
    PayloadError,
    can_match_row,
    parse_numeric_id,
    validate_payload,
)
from src.users_api.entities.user import UserCreate, UserUpdate

T = TypeVar("T")

READ_FAILED = "error reading data"
SAVE_FAILED = "error saving data"
UPDATE_FAILED = "error updating data"
USER_NOT_FOUND = "user not found"


class UsersResource:
    """Translates users requests into store calls and tagged results.

    Validation failures are returned before the store is touched. Store
    failures, including calls exceeding ``timeout`` seconds, are logged and
    returned as ``Failure(ErrorKind.STORE, ...)``; nothing is raised.
    """

    def __init__(self, store: UserStore, timeout: float | None = None) -> None:
        self._store = store
        self._timeout = timeout

    async def _execute(self, operation: str, func: Callable[..., T], *args: Any) -> T:
        logger.bind(operation=operation).debug("store.call")
        return await asyncio.wait_for(
            asyncio.to_thread(func, *args), timeout=self._timeout
        )

    @staticmethod
    def _store_failure(operation: str, message: str, exc: Exception) -> Failure:
        logger.bind(operation=operation, error_type=type(exc).__name__).error(
            "store.error: {}", str(exc) or "timed out"
        )
        return Failure(ErrorKind.STORE, message)

    async def list_users(self) -> Result:
        """Return every user."""
        try:
            users = await self._execute("list", self._store.select_all)
        except (StoreError, TimeoutError) as e:
            return self._store_failure("list", READ_FAILED, e)
        return Success([user.model_dump() for user in users])

    async def get_by_id(self, raw_id: str) -> Result:
        """Return the user with the given id as a singleton or empty list."""
        user_id = parse_numeric_id(raw_id)
        if user_id is None:
            return Failure(ErrorKind.VALIDATION, ID_NOT_NUMERIC)
        if not can_match_row(user_id):
            return Success([])

        try:
            users = await self._execute("get", self._store.select_by_id, user_id)
        except (StoreError, TimeoutError) as e:
            return self._store_failure("get", READ_FAILED, e)
        return Success([user.model_dump() for user in users])

    async def create(self, body: Any) -> Result:
        """Insert a user and echo the submitted fields with the new id."""
        try:
            validate_payload(UserCreate, body)
        except PayloadError as e:
            logger.bind(operation="create").info("validation failed: {}", e)
            return Failure(ErrorKind.VALIDATION, e.errors)

        # Submitted values, not the normalized ones
        username, email = body["username"], body["email"]
        try:
            new_id = await self._execute("create", self._store.insert, username, email)
        except (StoreError, TimeoutError) as e:
            return self._store_failure("create", SAVE_FAILED, e)

        logger.bind(operation="create", user_id=new_id).info("user created")
        return Success([{"username": username, "email": email}], extra={"id": new_id})

    async def update(self, raw_id: str, body: Any) -> Result:
        """Write only the supplied fields of the user with the given id."""
        user_id = parse_numeric_id(raw_id)
        if user_id is None:
            return Failure(ErrorKind.VALIDATION, ID_NOT_NUMERIC)

        try:
            validated = validate_payload(UserUpdate, body).changes()
        except PayloadError as e:
            logger.bind(operation="update").info("validation failed: {}", e)
            return Failure(ErrorKind.VALIDATION, e.errors)
        changes = {field: body[field] for field in validated}

        if not can_match_row(user_id):
            return Failure(ErrorKind.NOT_FOUND, USER_NOT_FOUND)

        try:
            updated = await self._execute(
                "update", self._store.update, user_id, changes
            )
        except (StoreError, TimeoutError) as e:
            return self._store_failure("update", UPDATE_FAILED, e)

        if updated is None:
            return Failure(ErrorKind.NOT_FOUND, USER_NOT_FOUND)
        return Success([{"id": user_id, **changes}])
