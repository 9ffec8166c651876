"""Costume schemas."""

from pydantic import Field, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from src.api.schemas.base import CamelModel
from src.domain.models import MAX_RENTAL_FEE

_http_url = TypeAdapter(HttpUrl)


class CostumeBase(CamelModel):
    costume_name: str = Field(..., min_length=1, max_length=200, examples=["Vampire Cape"])
    category: str = Field(..., min_length=1, max_length=100, examples=["Halloween"])
    rental_fee: float = Field(
        ..., ge=0, lt=MAX_RENTAL_FEE, allow_inf_nan=False, examples=[24.5]
    )
    size: str = Field(..., min_length=1, max_length=50, examples=["M"])
    description: str = Field(
        ..., min_length=1, examples=["Floor-length satin cape with a high collar"]
    )


class CostumeCreate(CostumeBase):
    """Body of ``POST /costumes``; the owner is the authenticated user."""

    image_url: str = Field(
        ...,
        max_length=2048,
        examples=["https://cdn.example.com/cape.jpg"],
        json_schema_extra={"format": "uri"},
    )

    @field_validator("image_url")
    @classmethod
    def image_url_is_http(cls, value: str) -> str:
        """Require an http(s) URL but keep it exactly as sent."""
        try:
            _http_url.validate_python(value)
        except PydanticValidationError as e:
            raise ValueError("Must be an http or https URL") from e
        return value


class CostumeResponse(CostumeBase):
    """A costume as returned by the API."""

    costume_id: str = Field(..., description="Server-generated identifier")
    image_url: str
    user_id: str = Field(..., description="Owner of the listing")
