"""Costume catalogue."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import ErrorCode, NotFoundError
from src.domain.models import Costume
from src.domain.repositories import CostumeRepository
from src.infrastructure.database.repository import DEFAULT_PAGINATION_LIMIT


class CostumeService:
    def __init__(self, session: AsyncSession) -> None:
        self.costumes = CostumeRepository(session)

    async def list_costumes(
        self,
        *,
        category: str | None = None,
        size: str | None = None,
        skip: int = 0,
        limit: int = DEFAULT_PAGINATION_LIMIT,
    ) -> list[Costume]:
        return await self.costumes.search(
            category=category, size=size, skip=skip, limit=limit
        )

    async def get_costume(self, costume_id: str) -> Costume:
        """Fetch one costume.

        Raises:
            NotFoundError: If no costume has this id.
        """
        costume = await self.costumes.get_by_id(costume_id)
        if costume is None:
            raise NotFoundError(
                f"Costume {costume_id} was not found",
                ErrorCode.COSTUME_NOT_FOUND,
                context={"costume_id": costume_id},
            )
        return costume

    async def create_costume(  # noqa: PLR0913 - mirrors the listing form
        self,
        *,
        owner_id: str,
        costume_name: str,
        category: str,
        rental_fee: float,
        size: str,
        image_url: str,
        description: str,
    ) -> Costume:
        """List a new costume owned by ``owner_id``."""
        costume = Costume(
            costume_name=costume_name,
            category=category,
            rental_fee=rental_fee,
            size=size,
            image_url=image_url,
            description=description,
            user_id=owner_id,
        )
        return await self.costumes.create(costume)
