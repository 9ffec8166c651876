"""Rental history and checkout endpoints."""

from fastapi import APIRouter, status

from src.api.dependencies import CurrentUser, RentalServiceDep
from src.api.schemas.errors import ErrorResponse
from src.api.schemas.rentals import RentalResponse
from src.domain.models import Rental

router = APIRouter(
    tags=["rentals"],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)


@router.get("/rentals", response_model=list[RentalResponse], summary="List rentals")
async def list_rentals(user: CurrentUser, service: RentalServiceDep) -> list[Rental]:
    return await service.list_rentals(user.id)


@router.get(
    "/rentals/{rental_id}",
    response_model=RentalResponse,
    summary="Get a rental",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_rental(
    rental_id: str, user: CurrentUser, service: RentalServiceDep
) -> Rental:
    return await service.get_rental(user.id, rental_id)


@router.get(
    "/checkout",
    response_model=list[RentalResponse],
    summary="Preview checkout",
)
async def preview_checkout(
    user: CurrentUser, service: RentalServiceDep
) -> list[Rental]:
    """Pending rentals that ``POST /checkout`` would confirm. Changes nothing."""
    return await service.preview_checkout(user.id)


@router.post(
    "/checkout",
    response_model=list[RentalResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Check out the cart",
    responses={status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse}},
)
async def checkout(user: CurrentUser, service: RentalServiceDep) -> list[Rental]:
    """Confirm a rental for every costume in the cart and empty the cart."""
    return await service.checkout(user.id)
