"""SQLAlchemy declarative base and the common model fields.

Every table gets:
- a UUID4 string primary key, generated by the application on insert and
  never changed afterwards
- ``created_at`` / ``updated_at`` timestamps set by the database
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, MetaData, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.infrastructure.constants import NAMING_CONVENTION

ID_LENGTH = 36


def generate_id() -> str:
    """Generate a new primary key value."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Declarative base with constraint naming conventions."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class BaseModel(Base):
    """Abstract model with id and timestamp columns."""

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        primary_key=True,
        default=generate_id,
        doc="Server-generated UUID4 identifier",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Timestamp when the record was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        doc="Timestamp when the record was last updated (UTC)",
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
