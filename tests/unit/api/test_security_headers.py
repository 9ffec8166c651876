"""Unit tests for SecurityHeadersMiddleware and the orjson response class."""

import orjson
import pytest
import pytest_check as check
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from src.api.constants import DEFAULT_HSTS_MAX_AGE
from src.api.middleware.security_headers import SecurityHeadersMiddleware
from src.api.utils.responses import ORJSONResponse


def build_app(**options: bool | int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware, **options)

    @app.get("/ping")
    async def ping() -> dict[str, str]:
        return {"status": "ok"}

    return app


async def get_headers(app: FastAPI) -> dict[str, str]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/ping")
    return dict(response.headers)


@pytest.mark.unit
class TestSecurityHeadersMiddleware:
    async def test_default_headers(self) -> None:
        headers = await get_headers(build_app())

        check.equal(headers["x-content-type-options"], "nosniff")
        check.equal(headers["x-frame-options"], "DENY")
        check.equal(headers["x-xss-protection"], "1; mode=block")
        check.equal(
            headers["strict-transport-security"],
            f"max-age={DEFAULT_HSTS_MAX_AGE}; includeSubDomains",
        )

    async def test_hsts_options(self) -> None:
        headers = await get_headers(
            build_app(hsts_max_age=60, hsts_include_subdomains=False, hsts_preload=True)
        )
        assert headers["strict-transport-security"] == "max-age=60; preload"

    async def test_hsts_disabled(self) -> None:
        headers = await get_headers(build_app(hsts_enabled=False))
        assert "strict-transport-security" not in headers


class _Payload(BaseModel):
    costume_id: str


@pytest.mark.unit
class TestORJSONResponse:
    def test_sorted_keys(self) -> None:
        response = ORJSONResponse({"size": "M", "category": "Halloween"})
        assert response.body == b'{"category":"Halloween","size":"M"}'

    def test_pydantic_model(self) -> None:
        response = ORJSONResponse(_Payload(costume_id="c-1"))
        assert orjson.loads(response.body) == {"costume_id": "c-1"}
