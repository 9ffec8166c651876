"""Cart request bodies."""

from pydantic import Field

from src.api.schemas.base import CamelModel


class CartRequest(CamelModel):
    """Body of ``POST /cart``."""

    costume_id: str = Field(..., min_length=1)
    user_id: str = Field(
        ..., min_length=1, description="Must be the authenticated user's id"
    )


class CancelRentalRequest(CamelModel):
    """Body of ``DELETE /cancel-rental``."""

    costume_id: str = Field(..., min_length=1)
