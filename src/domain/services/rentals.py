"""Rental history and checkout."""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import BusinessRuleError, ErrorCode, NotFoundError
from src.core.observability import trace_operation
from src.domain.models import Costume, Rental, RentalStatus
from src.domain.repositories import CartRepository, RentalRepository


def _rental_from(costume: Costume, user_id: str, status: RentalStatus) -> Rental:
    return Rental(
        user_id=user_id,
        costume_id=costume.id,
        costume_name=costume.costume_name,
        rental_fee=costume.rental_fee,
        status=status,
    )


class RentalService:
    """Turns cart contents into rentals and reads them back."""

    def __init__(self, session: AsyncSession) -> None:
        self.cart = CartRepository(session)
        self.rentals = RentalRepository(session)

    async def list_rentals(self, user_id: str) -> list[Rental]:
        return await self.rentals.list_for_user(user_id)

    async def get_rental(self, user_id: str, rental_id: str) -> Rental:
        """Fetch one of the user's rentals.

        Raises:
            NotFoundError: If the rental does not exist or belongs to someone
                else.
        """
        rental = await self.rentals.get_for_user(rental_id, user_id)
        if rental is None:
            raise NotFoundError(
                f"Rental {rental_id} was not found",
                ErrorCode.RENTAL_NOT_FOUND,
                context={"rental_id": rental_id},
            )
        return rental

    async def preview_checkout(self, user_id: str) -> list[Rental]:
        """Describe what checking out now would produce.

        The returned rentals are pending and unsaved: no id and no rental
        time. An empty cart previews as an empty list.
        """
        costumes = await self.cart.list_costumes(user_id)
        return [_rental_from(c, user_id, RentalStatus.PENDING) for c in costumes]

    async def checkout(self, user_id: str) -> list[Rental]:
        """Confirm a rental for every costume in the cart and empty it.

        Runs inside the caller's transaction, so either every rental is
        stored and the cart emptied, or nothing changes.

        Raises:
            BusinessRuleError: If the cart is empty.
        """
        with trace_operation("checkout", user_id=user_id) as span:
            costumes = await self.cart.list_costumes(user_id)
            if not costumes:
                raise BusinessRuleError(
                    "Cannot check out an empty cart", ErrorCode.EMPTY_CART
                )

            rentals = [
                await self.rentals.create(
                    _rental_from(costume, user_id, RentalStatus.CONFIRMED)
                )
                for costume in costumes
            ]
            cleared = await self.cart.clear(user_id)
            span.set_attribute("checkout.rental_count", len(rentals))

            logger.info(
                "Checked out {} costumes", len(rentals), cleared_entries=cleared
            )
            return rentals
