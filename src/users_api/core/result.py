"""Outcome types returned by every resource operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE = "store"


@dataclass(frozen=True)
class Success:
    """Rows produced by the operation, plus any top-level response fields."""

    data: list[dict[str, Any]]
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Failure:
    """Why the operation did not produce data.

    ``detail`` is a message, or a list of ``{"field", "message"}`` entries
    for payload validation errors.
    """

    kind: ErrorKind
    detail: str | list[dict[str, str]]


Result = Success | Failure
