"""Integration tests for monitoring endpoints and the OpenAPI document."""

import pytest
import pytest_check as check
from httpx import AsyncClient
from pytest_mock import MockerFixture

PROTECTED_OPERATIONS = [
    ("/cart", "get"),
    ("/cart", "post"),
    ("/cancel-rental", "delete"),
    ("/rentals", "get"),
    ("/rentals/{rental_id}", "get"),
    ("/checkout", "get"),
    ("/checkout", "post"),
    ("/costumes", "post"),
]


@pytest.mark.integration
class TestMonitoring:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": True}

    async def test_health_degraded(
        self, client: AsyncClient, mocker: MockerFixture
    ) -> None:
        mocker.patch(
            "src.api.main.check_database_connection",
            return_value=(False, "connection refused"),
        )

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "degraded", "database": False}

    async def test_info(self, client: AsyncClient) -> None:
        response = await client.get("/info")

        assert response.json() == {
            "app_name": "Costume Rental API",
            "version": "1.0.0",
            "environment": "development",
            "debug": True,
        }

    async def test_unknown_route(self, client: AsyncClient) -> None:
        response = await client.get("/nowhere")

        check.equal(response.status_code, 404)
        check.equal(response.json()["error_code"], "NOT_FOUND")


@pytest.mark.integration
class TestOpenApi:
    async def test_bearer_scheme_is_documented(self, client: AsyncClient) -> None:
        schema = (await client.get("/openapi.json")).json()

        scheme = schema["components"]["securitySchemes"]["bearerAuth"]
        check.equal(scheme["type"], "http")
        check.equal(scheme["scheme"], "bearer")
        check.equal(scheme["bearerFormat"], "JWT")

        for path, method in PROTECTED_OPERATIONS:
            operation = schema["paths"][path][method]
            check.equal(operation.get("security"), [{"bearerAuth": []}], f"{method} {path}")

    async def test_public_operations_have_no_security(self, client: AsyncClient) -> None:
        schema = (await client.get("/openapi.json")).json()

        check.is_not_in("security", schema["paths"]["/costumes"]["get"])
        check.is_not_in("security", schema["paths"]["/costumes/{costume_id}"]["get"])

    async def test_schemas_use_camel_case(self, client: AsyncClient) -> None:
        schemas = (await client.get("/openapi.json")).json()["components"]["schemas"]

        check.is_in("costumeId", schemas["CostumeResponse"]["properties"])
        check.is_in("rentalFee", schemas["RentalResponse"]["properties"])
        check.equal(
            sorted(schemas["CartRequest"]["required"]), ["costumeId", "userId"]
        )

    async def test_docs(self, client: AsyncClient) -> None:
        response = await client.get("/docs")

        assert response.status_code == 200
        assert "swagger-ui" in response.text.lower()
