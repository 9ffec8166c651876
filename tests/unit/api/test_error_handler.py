"""Unit tests for src/api/middleware/error_handler.py."""

import orjson
import pytest
import pytest_check as check
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.requests import Request

from src.api.middleware.error_handler import (
    costume_rental_error_handler,
    generic_exception_handler,
    http_exception_handler,
    status_code_for,
    validation_error_handler,
)
from src.core.context import RequestContext
from src.core.exceptions import (
    BusinessRuleError,
    ConflictError,
    CostumeRentalError,
    ErrorCode,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


def make_request(path: str = "/cart", method: str = "POST") -> Request:
    request = Request(
        {
            "type": "http",
            "method": method,
            "path": path,
            "headers": [],
            "query_string": b"",
        }
    )
    request.state.request_id = "req-test"
    return request


def body_of(response: object) -> dict[str, object]:
    return orjson.loads(response.body)  # type: ignore[attr-defined]


@pytest.mark.unit
class TestStatusMapping:
    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ValidationError("bad"), 400),
            (UnauthorizedError("no token"), 401),
            (ForbiddenError("not yours"), 403),
            (NotFoundError("missing"), 404),
            (ConflictError("duplicate"), 409),
            (BusinessRuleError("empty cart"), 422),
            (CostumeRentalError(ErrorCode.INTERNAL_ERROR, "boom"), 500),
        ],
    )
    def test_status_code_for(self, error: CostumeRentalError, expected: int) -> None:
        assert status_code_for(error) == expected


@pytest.mark.unit
class TestCostumeRentalErrorHandler:
    async def test_not_found_body(self) -> None:
        RequestContext.set_correlation_id("corr-1")
        error = NotFoundError(
            "Costume c-1 was not found",
            ErrorCode.COSTUME_NOT_FOUND,
            context={"costume_id": "c-1"},
        )

        response = await costume_rental_error_handler(make_request(), error)
        body = body_of(response)

        check.equal(response.status_code, 404)
        check.equal(body["error_code"], "COSTUME_NOT_FOUND")
        check.equal(body["message"], "Costume c-1 was not found")
        check.equal(body["details"], {"costume_id": "c-1"})
        check.equal(body["correlation_id"], "corr-1")
        check.equal(body["request_id"], "req-test")
        check.equal(body["severity"], "LOW")
        check.equal(body["service_info"]["name"], "Costume Rental API")  # type: ignore[index]
        check.equal(body["debug_info"]["exception_type"], "NotFoundError")  # type: ignore[index]

    async def test_unauthorized_sends_bearer_challenge(self) -> None:
        response = await costume_rental_error_handler(
            make_request(), UnauthorizedError("Missing bearer token")
        )

        check.equal(response.status_code, 401)
        check.equal(response.headers["www-authenticate"], "Bearer")

    async def test_context_is_redacted_in_body_and_debug_info(self) -> None:
        error = ValidationError(
            "bad", context={"password": "hunter2-secret", "costume_id": "c-1"}
        )

        response = await costume_rental_error_handler(make_request(), error)
        body = body_of(response)

        expected = {"password": "[REDACTED]", "costume_id": "c-1"}
        check.equal(body["details"], expected)
        check.equal(body["debug_info"]["error_context"], expected)  # type: ignore[index]
        check.is_not_in("hunter2-secret", response.body.decode())

    async def test_debug_info_hidden_in_production(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")

        response = await costume_rental_error_handler(
            make_request(), ConflictError("duplicate", cause=KeyError("x"))
        )

        check.equal(response.status_code, 409)
        check.is_none(body_of(response)["debug_info"])

    async def test_rejects_other_exceptions(self) -> None:
        with pytest.raises(TypeError):
            await costume_rental_error_handler(make_request(), ValueError("x"))


@pytest.mark.unit
class TestValidationErrorHandler:
    async def test_groups_errors_by_field(self) -> None:
        exc = RequestValidationError(
            [
                {"loc": ("body", "costumeId"), "msg": "Field required", "type": "missing"},
                {"loc": ("body", "userId"), "msg": "Field required", "type": "missing"},
                {"loc": ("body",), "msg": "Invalid JSON", "type": "json_invalid"},
            ]
        )

        response = await validation_error_handler(make_request(), exc)
        body = body_of(response)

        check.equal(response.status_code, 422)
        check.equal(body["error_code"], "VALIDATION_ERROR")
        check.equal(
            body["details"],
            {
                "validation_errors": {
                    "costumeId": ["Field required"],
                    "userId": ["Field required"],
                    "root": ["Invalid JSON"],
                }
            },
        )


@pytest.mark.unit
class TestHttpExceptionHandler:
    async def test_not_found_route(self) -> None:
        response = await http_exception_handler(
            make_request("/nowhere", "GET"), HTTPException(404, "Not Found")
        )
        body = body_of(response)

        check.equal(response.status_code, 404)
        check.equal(body["error_code"], "NOT_FOUND")
        check.equal(body["message"], "Not Found")

    async def test_method_not_allowed(self) -> None:
        response = await http_exception_handler(
            make_request("/checkout", "PUT"),
            HTTPException(405, "Method Not Allowed", headers={"Allow": "GET, POST"}),
        )

        check.equal(response.status_code, 405)
        check.equal(response.headers["allow"], "GET, POST")


@pytest.mark.unit
class TestGenericExceptionHandler:
    async def test_development_shows_details(self) -> None:
        response = await generic_exception_handler(
            make_request(), RuntimeError("pool exhausted")
        )
        body = body_of(response)

        check.equal(response.status_code, 500)
        check.equal(body["error_code"], "INTERNAL_ERROR")
        check.equal(body["severity"], "CRITICAL")
        check.equal(body["details"], {"error": "pool exhausted", "type": "RuntimeError"})

    async def test_production_hides_details(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")

        response = await generic_exception_handler(
            make_request(), RuntimeError("pool exhausted")
        )
        body = body_of(response)

        check.equal(body["message"], "An internal server error occurred")
        check.is_none(body["details"])
        check.is_none(body["debug_info"])
