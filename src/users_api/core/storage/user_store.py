"""Data-access layer for the ``users`` table."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from src.users_api.entities.user import User, UserTable

if TYPE_CHECKING:
    from src.users_api.core.services.database import DbSessionService

T = TypeVar("T")

UserId = int | float


class StoreError(Exception):
    """Raised when the store rejects a query or cannot be reached."""


class UserStore:
    """Executes the user queries, one session and transaction per call.

    Every method is synchronous and may block on the database; callers on the
    event loop run them in a worker thread.
    """

    def __init__(self, database: DbSessionService) -> None:
        self._database = database

    def _run(self, operation: Callable[[Session], T]) -> T:
        try:
            with self._database.session_scope() as session:
                return operation(session)
        except (SQLAlchemyError, OverflowError) as e:
            raise StoreError(str(e)) from e

    @staticmethod
    def _to_user(row: UserTable) -> User:
        return User.model_validate(row, from_attributes=True)

    def select_all(self) -> list[User]:
        """SELECT * FROM users."""

        def op(session: Session) -> list[User]:
            rows = session.exec(select(UserTable).order_by(UserTable.id)).all()
            return [self._to_user(row) for row in rows]

        return self._run(op)

    def select_by_id(self, user_id: UserId) -> list[User]:
        """SELECT * FROM users WHERE id = :user_id; zero or one user."""

        def op(session: Session) -> list[User]:
            rows = session.exec(select(UserTable).where(UserTable.id == user_id)).all()
            return [self._to_user(row) for row in rows]

        return self._run(op)

    def insert(self, username: str, email: str) -> int:
        """INSERT INTO users(username, email); returns the generated id."""

        def op(session: Session) -> int:
            row = UserTable(username=username, email=email)
            session.add(row)
            session.flush()
            if row.id is None:
                raise StoreError("store did not return a generated id")
            return row.id

        return self._run(op)

    def update(self, user_id: UserId, changes: dict[str, str]) -> User | None:
        """UPDATE users SET <changes> WHERE id = :user_id.

        Only the keys present in ``changes`` are written. Returns the updated
        user, or None when no row matches.
        """

        def op(session: Session) -> User | None:
            row = session.exec(select(UserTable).where(UserTable.id == user_id)).first()
            if row is None:
                return None
            for field, value in changes.items():
                setattr(row, field, value)
            session.add(row)
            session.flush()
            return self._to_user(row)

        return self._run(op)
