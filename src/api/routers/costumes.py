"""Costume catalogue endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.api.constants import MAX_PAGINATION_LIMIT
from src.api.dependencies import CostumeServiceDep, CurrentUser
from src.api.schemas.costumes import CostumeCreate, CostumeResponse
from src.api.schemas.errors import ErrorResponse
from src.domain.models import Costume

router = APIRouter(prefix="/costumes", tags=["costumes"])


@router.get("", response_model=list[CostumeResponse], summary="List costumes")
async def list_costumes(
    service: CostumeServiceDep,
    category: Annotated[str | None, Query(description="Exact category, any case")] = None,
    size: Annotated[str | None, Query(description="Exact size, any case")] = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGINATION_LIMIT)] = MAX_PAGINATION_LIMIT,
) -> list[Costume]:
    return await service.list_costumes(
        category=category, size=size, skip=skip, limit=limit
    )


@router.get(
    "/{costume_id}",
    response_model=CostumeResponse,
    summary="Get a costume",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_costume(costume_id: str, service: CostumeServiceDep) -> Costume:
    return await service.get_costume(costume_id)


@router.post(
    "",
    response_model=CostumeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="List a new costume",
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)
async def create_costume(
    body: CostumeCreate, user: CurrentUser, service: CostumeServiceDep
) -> Costume:
    """Create a costume owned by the authenticated user."""
    return await service.create_costume(
        owner_id=user.id,
        costume_name=body.costume_name,
        category=body.category,
        rental_fee=body.rental_fee,
        size=body.size,
        image_url=body.image_url,
        description=body.description,
    )
