"""Repositories for the costume rental entities."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models import CartItem, Costume, Rental, User
from src.infrastructure.database.repository import (
    DEFAULT_PAGINATION_LIMIT,
    BaseRepository,
)


class UserRepository(BaseRepository[User]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Look a user up by email, ignoring case."""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class CostumeRepository(BaseRepository[Costume]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Costume)

    async def search(
        self,
        *,
        category: str | None = None,
        size: str | None = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGINATION_LIMIT,
    ) -> list[Costume]:
        """List costumes, optionally narrowed by category and size.

        Both filters are case-insensitive exact matches.
        """
        stmt = select(Costume)
        if category:
            stmt = stmt.where(func.lower(Costume.category) == category.lower())
        if size:
            stmt = stmt.where(func.lower(Costume.size) == size.lower())
        stmt = stmt.order_by(Costume.created_at, Costume.id).offset(skip).limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class CartRepository(BaseRepository[CartItem]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CartItem)

    async def get_entry(self, user_id: str, costume_id: str) -> CartItem | None:
        return await self.find_one_by(user_id=user_id, costume_id=costume_id)

    async def list_costumes(self, user_id: str) -> list[Costume]:
        """Costumes currently in the user's cart, oldest entry first."""
        stmt = (
            select(Costume)
            .join(CartItem, CartItem.costume_id == Costume.id)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.created_at, CartItem.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def clear(self, user_id: str) -> int:
        """Remove every cart entry of a user.

        Returns:
            int: Number of entries removed.
        """
        result = await self.session.execute(
            delete(CartItem).where(CartItem.user_id == user_id)
        )
        return result.rowcount or 0


class RentalRepository(BaseRepository[Rental]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Rental)

    async def list_for_user(self, user_id: str) -> list[Rental]:
        return await self.filter_by(user_id=user_id)

    async def get_for_user(self, rental_id: str, user_id: str) -> Rental | None:
        """Fetch a rental only if it belongs to the user."""
        return await self.find_one_by(id=rental_id, user_id=user_id)
