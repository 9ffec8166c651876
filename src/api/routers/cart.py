"""Cart endpoints: view, add and cancel."""

from fastapi import APIRouter, status

from src.api.dependencies import CartServiceDep, CurrentUser
from src.api.schemas.cart import CancelRentalRequest, CartRequest
from src.api.schemas.costumes import CostumeResponse
from src.api.schemas.errors import ErrorResponse
from src.domain.models import Costume

router = APIRouter(
    tags=["cart"],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)


@router.get("/cart", response_model=list[CostumeResponse], summary="View the cart")
async def get_cart(user: CurrentUser, service: CartServiceDep) -> list[Costume]:
    return await service.list_cart(user.id)


@router.post(
    "/cart",
    response_model=CostumeResponse,
    summary="Add a costume to the cart",
    responses={
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
async def add_to_cart(
    body: CartRequest, user: CurrentUser, service: CartServiceDep
) -> Costume:
    """Add a costume and return it.

    ``userId`` in the body must be the authenticated user.
    """
    return await service.add_to_cart(user.id, body.costume_id, body.user_id)


@router.delete(
    "/cancel-rental",
    response_model=CostumeResponse,
    summary="Remove a costume from the cart",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def cancel_rental(
    body: CancelRentalRequest, user: CurrentUser, service: CartServiceDep
) -> Costume:
    """Remove a costume from the cart and return it.

    Answers 404 when the costume is not in the cart.
    """
    return await service.cancel(user.id, body.costume_id)
