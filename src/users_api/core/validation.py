"""Input checks applied before any store call."""

from __future__ import annotations

import math
import re
from typing import Any, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

ID_NOT_NUMERIC = "id must be numeric"

# Plain decimal notation: sign, digits, optional fraction and exponent.
_NUMERIC = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER = re.compile(r"[+-]?\d+")

# Range of a signed 64-bit INTEGER primary key
ROW_ID_MIN = -(2**63)
ROW_ID_MAX = 2**63 - 1

ModelT = TypeVar("ModelT", bound=BaseModel)


class PayloadError(ValueError):
    """A request body failed validation."""

    def __init__(self, errors: list[dict[str, str]]) -> None:
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))
        self.errors = errors


def parse_numeric_id(raw: str | None) -> int | float | None:
    """Parse a path id into a finite number.

    Returns None when ``raw`` is not a finite decimal number. Integral values
    come back as ``int``.
    """
    if raw is None:
        return None
    text = raw.strip()
    if not _NUMERIC.fullmatch(text):
        return None
    if _INTEGER.fullmatch(text):
        return int(text)
    value = float(text)
    if not math.isfinite(value):
        return None
    if value.is_integer():
        return int(value)
    return value


def can_match_row(user_id: int | float) -> bool:
    """Whether a parsed id could identify a stored row.

    Fractional ids and integers outside the key range never match, so they
    are answered without querying the store.
    """
    return isinstance(user_id, int) and ROW_ID_MIN <= user_id <= ROW_ID_MAX


def format_validation_errors(
    exc: ValidationError | RequestValidationError,
) -> list[dict[str, str]]:
    """Flatten pydantic or FastAPI errors into ``{"field", "message"}`` entries."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append(
            {
                "field": ".".join(loc) or "body",
                "message": error.get("msg", "invalid value"),
            }
        )
    return errors


def validate_payload(model: type[ModelT], body: Any) -> ModelT:
    """Validate a decoded JSON body against ``model``.

    Raises:
        PayloadError: with one entry per failed field
    """
    try:
        return model.model_validate(body if body is not None else {})
    except ValidationError as e:
        raise PayloadError(format_validation_errors(e)) from e
