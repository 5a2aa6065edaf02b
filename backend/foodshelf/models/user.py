"""
FoodShelf Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table — the owners of food records.
Why:   Foods reference their owner by id; the list and show endpoints
       populate that reference into the full user record.
Who:   Read by the auth dependency (token lookup) and by FoodService
       (owner population). Rows are provisioned by the external auth flow.

The bearer token lives on the row itself: an opaque random string,
unique, nullable (NULL means signed out). It is never serialized.
"""

import uuid
from datetime import datetime, timezone
from typing import List, TYPE_CHECKING

from sqlalchemy import DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from foodshelf.database import Base

if TYPE_CHECKING:
    from foodshelf.models.food import Food


class User(Base):
    """An account that can own foods."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    token: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        unique=True,
        index=True,
        comment="Opaque bearer token; NULL when signed out",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    foods: Mapped[List["Food"]] = relationship(back_populates="owner")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
