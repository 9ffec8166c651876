"""ORM entities for users, costumes, cart entries and rentals."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import Enum, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.base import ID_LENGTH, BaseModel

FEE_PRECISION = 10
FEE_SCALE = 2
# Exclusive upper bound of what NUMERIC(FEE_PRECISION, FEE_SCALE) can hold
MAX_RENTAL_FEE = 10 ** (FEE_PRECISION - FEE_SCALE)


class RentalStatus(StrEnum):
    """Lifecycle of a rental.

    ``pending`` only appears in checkout previews and is never stored.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"


class User(BaseModel):
    """A registered customer; also the lister of the costumes they own."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)

    @property
    def user_id(self) -> str:
        return self.id


class Costume(BaseModel):
    """A rentable costume listed by a user."""

    __tablename__ = "costumes"

    costume_name: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    rental_fee: Mapped[float] = mapped_column(
        Numeric(FEE_PRECISION, FEE_SCALE, asdecimal=False), nullable=False
    )
    size: Mapped[str] = mapped_column(String(50), nullable=False)
    image_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    @property
    def costume_id(self) -> str:
        return self.id


class CartItem(BaseModel):
    """A costume a user intends to rent; removed at checkout or cancellation."""

    __tablename__ = "cart_items"
    __table_args__ = (UniqueConstraint("user_id", "costume_id"),)

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    costume_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("costumes.id", ondelete="CASCADE"), nullable=False
    )


class Rental(BaseModel):
    """A confirmed rental.

    Name and fee are copied from the costume at checkout so the record keeps
    what the user agreed to even if the listing changes later.
    """

    __tablename__ = "rentals"

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    costume_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("costumes.id"), nullable=False
    )
    costume_name: Mapped[str] = mapped_column(String(200), nullable=False)
    rental_fee: Mapped[float] = mapped_column(
        Numeric(FEE_PRECISION, FEE_SCALE, asdecimal=False), nullable=False
    )
    status: Mapped[RentalStatus] = mapped_column(
        Enum(
            RentalStatus,
            native_enum=False,
            length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=RentalStatus.CONFIRMED,
    )

    @property
    def rental_id(self) -> str:
        return self.id

    @property
    def rented_at(self) -> datetime:
        return self.created_at
