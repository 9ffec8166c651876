"""Integration tests for registration, login and bearer verification."""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_check as check
from httpx import AsyncClient

from src.core.config import get_settings
from src.domain.models import User
from src.domain.security import create_access_token
from tests.integration.factories import TEST_PASSWORD

REGISTRATION = {"email": "Cleo@Example.com", "name": "Cleo", "password": "n1ghtshade!"}


@pytest.mark.integration
class TestRegister:
    async def test_register_returns_usable_token(self, client: AsyncClient) -> None:
        response = await client.post("/auth/register", json=REGISTRATION)

        assert response.status_code == 201
        body = response.json()
        check.equal(body["tokenType"], "bearer")
        check.equal(body["user"]["email"], "cleo@example.com")
        check.is_not_in("passwordHash", body["user"])

        cart = await client.get(
            "/cart", headers={"Authorization": f"Bearer {body['accessToken']}"}
        )
        check.equal(cart.status_code, 200)

    async def test_duplicate_email_any_case(self, client: AsyncClient) -> None:
        await client.post("/auth/register", json=REGISTRATION)

        response = await client.post(
            "/auth/register", json={**REGISTRATION, "email": "CLEO@example.com"}
        )

        assert response.status_code == 409
        assert response.json()["error_code"] == "EMAIL_ALREADY_REGISTERED"

    async def test_password_never_echoed_in_errors(self, client: AsyncClient) -> None:
        response = await client.post(
            "/auth/register", json={**REGISTRATION, "email": "not-an-email"}
        )

        assert response.status_code == 422
        assert REGISTRATION["password"] not in response.text

    async def test_overlong_password_is_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/auth/register", json={**REGISTRATION, "password": "é" * 40}
        )

        check.equal(response.status_code, 400)
        check.equal(response.json()["error_code"], "PASSWORD_TOO_LONG")

    @pytest.mark.parametrize("email", ["cleo@exa..mple.com", "cleo@-x.com"])
    async def test_malformed_email_is_rejected(
        self, client: AsyncClient, email: str
    ) -> None:
        response = await client.post(
            "/auth/register", json={**REGISTRATION, "email": email}
        )

        check.equal(response.status_code, 422)
        check.is_in("email", response.json()["details"]["validation_errors"])

    async def test_password_whitespace_is_significant(self, client: AsyncClient) -> None:
        await client.post(
            "/auth/register", json={**REGISTRATION, "password": "  padded-pass  "}
        )

        stripped = await client.post(
            "/auth/login",
            json={"email": REGISTRATION["email"], "password": "padded-pass"},
        )
        padded = await client.post(
            "/auth/login",
            json={"email": REGISTRATION["email"], "password": "  padded-pass  "},
        )

        check.equal(stripped.status_code, 401)
        check.equal(padded.status_code, 200)


@pytest.mark.integration
class TestLogin:
    async def test_login(self, client: AsyncClient, current_user: User) -> None:
        response = await client.post(
            "/auth/login", json={"email": current_user.email, "password": TEST_PASSWORD}
        )

        assert response.status_code == 200
        assert response.json()["user"]["userId"] == current_user.id

    @pytest.mark.parametrize(
        ("email", "password"),
        [("ana@example.com", "wrong-password"), ("nobody@example.com", TEST_PASSWORD)],
    )
    async def test_bad_credentials(
        self, client: AsyncClient, current_user: User, email: str, password: str
    ) -> None:
        response = await client.post(
            "/auth/login", json={"email": email, "password": password}
        )

        check.equal(response.status_code, 401)
        check.equal(response.json()["error_code"], "INVALID_CREDENTIALS")
        check.equal(response.headers["www-authenticate"], "Bearer")


@pytest.mark.integration
class TestBearerVerification:
    async def test_expired_token(self, client: AsyncClient, current_user: User) -> None:
        token = create_access_token(
            current_user.id,
            get_settings().auth_config,
            now=datetime.now(UTC) - timedelta(days=1),
        )

        response = await client.get(
            "/cart", headers={"Authorization": f"Bearer {token}"}
        )

        check.equal(response.status_code, 401)
        check.equal(response.json()["error_code"], "INVALID_TOKEN")

    async def test_token_for_deleted_user(self, client: AsyncClient) -> None:
        token = create_access_token("no-such-user", get_settings().auth_config)

        response = await client.get(
            "/rentals", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401

    async def test_non_bearer_scheme(self, client: AsyncClient) -> None:
        response = await client.get(
            "/cart", headers={"Authorization": "Basic YW5hOnB3"}
        )

        assert response.status_code == 401
