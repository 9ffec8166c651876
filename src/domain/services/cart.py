"""Cart management: add, list and cancel."""

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import ConflictError, ErrorCode, ForbiddenError, NotFoundError
from src.core.observability import trace_operation
from src.domain.models import CartItem, Costume
from src.domain.repositories import CartRepository
from src.domain.services.costumes import CostumeService


class CartService:
    """Operations on the authenticated user's cart.

    All methods take the id of the authenticated user; a user can only ever
    see or change their own cart.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.cart = CartRepository(session)
        self.costumes = CostumeService(session)

    async def list_cart(self, user_id: str) -> list[Costume]:
        return await self.cart.list_costumes(user_id)

    async def add_to_cart(
        self, user_id: str, costume_id: str, requested_user_id: str
    ) -> Costume:
        """Put a costume in the cart.

        Args:
            user_id: The authenticated user.
            costume_id: Costume to add.
            requested_user_id: ``userId`` sent in the request body.

        Returns:
            Costume: The costume that was added.

        Raises:
            ForbiddenError: If the body names a different user.
            NotFoundError: If the costume does not exist.
            ConflictError: If the costume is already in the cart.
        """
        with trace_operation("cart.add", user_id=user_id, costume_id=costume_id):
            if requested_user_id != user_id:
                raise ForbiddenError(
                    "Cannot modify another user's cart",
                    context={"user_id": user_id, "requested_user_id": requested_user_id},
                )

            costume = await self.costumes.get_costume(costume_id)

            if await self.cart.get_entry(user_id, costume_id) is not None:
                raise self._already_in_cart(costume_id)

            try:
                await self.cart.create(CartItem(user_id=user_id, costume_id=costume_id))
            except IntegrityError as e:
                raise self._already_in_cart(costume_id, cause=e) from e

            logger.info("Costume {} added to cart", costume_id)
            return costume

    async def cancel(self, user_id: str, costume_id: str) -> Costume:
        """Take a costume out of the cart.

        Returns:
            Costume: The costume that was removed.

        Raises:
            NotFoundError: If the costume is not in the cart.
        """
        with trace_operation("cart.cancel", user_id=user_id, costume_id=costume_id):
            entry = await self.cart.get_entry(user_id, costume_id)
            if entry is None:
                raise NotFoundError(
                    f"Costume {costume_id} is not in the cart",
                    ErrorCode.CART_ITEM_NOT_FOUND,
                    context={"costume_id": costume_id},
                )

            costume = await self.costumes.get_costume(costume_id)
            await self.cart.delete(entry.id)
            logger.info("Costume {} removed from cart", costume_id)
            return costume

    @staticmethod
    def _already_in_cart(
        costume_id: str, cause: Exception | None = None
    ) -> ConflictError:
        return ConflictError(
            f"Costume {costume_id} is already in the cart",
            ErrorCode.COSTUME_ALREADY_IN_CART,
            context={"costume_id": costume_id},
            cause=cause,
        )
