"""
FoodShelf Backend — Food SQLAlchemy Model
===========================================

What:  ORM model representing the `foods` table.
Why:   Maps Python objects to database rows for type-safe CRUD operations.
Who:   Used by FoodService for CRUD and by Alembic for schema management.

Table Design Rationale:
    - UUID primary key: Non-sequential, cannot be enumerated
    - owner_id: Set once at creation from the authenticated user; the API
      never exposes a way to change it
    - title / text: The client-supplied content, mutable via partial update
    - created_at / updated_at: UTC, timezone-aware

    ON DELETE CASCADE on owner_id: a food cannot outlive its owner, since
    every food must have exactly one.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from foodshelf.database import Base

if TYPE_CHECKING:
    from foodshelf.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Food(Base):
    """
    A food record owned by exactly one user.

    Lifecycle:
        1. Created by an authenticated user (owner = creator)
        2. Read by anyone
        3. Updated (merge) or deleted only by the owner
        4. Deletion is permanent — no soft delete
    """

    __tablename__ = "foods"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Creator of the record; immutable",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    text: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )

    # Populated explicitly with selectinload(); async sessions cannot lazy-load
    owner: Mapped["User"] = relationship(back_populates="foods")

    __table_args__ = (
        Index("idx_foods_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Food(id={self.id}, title='{self.title}', owner_id={self.owner_id})>"
