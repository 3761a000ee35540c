"""Unit tests for result types and their HTTP mapping."""

import json

import pytest

from src.users_api.api.http.responses import error_envelope, to_response
from src.users_api.core.result import ErrorKind, Failure, Success


def _body(response) -> dict:
    return json.loads(response.body)


class TestToResponse:
    def test_success(self):
        response = to_response(Success([{"id": 1, "username": "a", "email": "a@x.io"}]))

        assert response.status_code == 200
        assert _body(response) == {
            "data": [{"id": 1, "username": "a", "email": "a@x.io"}],
            "error": None,
        }

    def test_success_extra_fields_are_top_level(self):
        response = to_response(
            Success([{"username": "a", "email": "a@x.io"}], extra={"id": 7})
        )

        assert _body(response) == {
            "data": [{"username": "a", "email": "a@x.io"}],
            "id": 7,
            "error": None,
        }

    @pytest.mark.parametrize(
        "kind, status",
        [
            (ErrorKind.VALIDATION, 400),
            (ErrorKind.NOT_FOUND, 404),
            (ErrorKind.STORE, 500),
        ],
    )
    def test_failure_status(self, kind, status):
        response = to_response(Failure(kind, "boom"))

        assert response.status_code == status
        assert _body(response) == {"data": [], "error": "boom"}

    def test_failure_with_field_errors(self):
        errors = [{"field": "email", "message": "invalid"}]
        response = to_response(Failure(ErrorKind.VALIDATION, errors))

        assert _body(response) == {"data": [], "error": errors}

    def test_rejects_other_values(self):
        with pytest.raises(TypeError):
            to_response({"data": []})


def test_error_envelope_headers():
    response = error_envelope(500, "Internal Server Error", headers={"X-Request-ID": "r1"})

    assert response.status_code == 500
    assert response.headers["X-Request-ID"] == "r1"
    assert _body(response) == {"data": [], "error": "Internal Server Error"}
