"""Rental schemas."""

from datetime import datetime

from pydantic import Field

from src.api.schemas.base import CamelModel
from src.domain.models import RentalStatus


class RentalResponse(CamelModel):
    """A rental, or a pending line of a checkout preview.

    Pending entries have neither ``rentalId`` nor ``rentedAt``.
    """

    rental_id: str | None = Field(default=None, description="Null while pending")
    costume_id: str
    user_id: str
    costume_name: str = Field(..., description="Costume name at checkout")
    rental_fee: float = Field(..., description="Listed fee at checkout")
    status: RentalStatus
    rented_at: datetime | None = Field(default=None, description="Null while pending")
