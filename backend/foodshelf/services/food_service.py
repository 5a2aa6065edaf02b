"""
FoodShelf Backend — Food Service (Business Logic)
===================================================

What:  CRUD and ownership rules for the foods resource.
Why:   Keeps lookup, authorization, and persistence independent of HTTP.
How:   Each method receives the request's AsyncSession, performs one store
       operation, and returns a response schema (or None for 204 routes).
Who:   Called by the route handlers in routes/foods.py.

Operation Flow (update / delete):
    ┌──────────┐    ┌────────────┐    ┌─────────────┐    ┌──────────┐
    │  Load    │───▶│ handle_404 │───▶│  require_   │───▶│  Mutate  │
    │  by id   │    │            │    │  ownership  │    │  (flush) │
    └──────────┘    └────────────┘    └─────────────┘    └──────────┘

    The check and the mutation are not atomic. The owner column is never
    written after creation, so the check cannot go stale in practice.

Error Handling Strategy:
    Our own exceptions propagate unchanged. SQLAlchemy failures are logged
    and wrapped in DatabaseError so the client only sees a generic 500.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from foodshelf.exceptions import DatabaseError, FoodShelfError
from foodshelf.models.food import Food
from foodshelf.schemas.food import (
    FoodCreate,
    FoodDetailEnvelope,
    FoodDetailResponse,
    FoodEnvelope,
    FoodListResponse,
    FoodResponse,
    FoodUpdate,
    OwnerResponse,
)
from foodshelf.services.ownership import handle_404, require_ownership

logger = logging.getLogger(__name__)


def _parse_id(food_id: str) -> Optional[uuid.UUID]:
    # A malformed id can't name a stored record; callers treat None as 404
    try:
        return uuid.UUID(str(food_id))
    except ValueError:
        return None


def _to_response(food: Food) -> FoodResponse:
    return FoodResponse(
        id=food.id,
        owner=food.owner_id,
        title=food.title,
        text=food.text,
        created_at=food.created_at,
        updated_at=food.updated_at,
    )


def _to_detail(food: Food) -> FoodDetailResponse:
    return FoodDetailResponse(
        id=food.id,
        owner=OwnerResponse.model_validate(food.owner),
        title=food.title,
        text=food.text,
        created_at=food.created_at,
        updated_at=food.updated_at,
    )


class FoodService:
    """
    Business logic layer for food operations.

    Responsibilities:
        - list_foods():  All foods, owners populated
        - get_food():    One food, owner populated, 404 when missing
        - create_food(): Insert with the caller as owner
        - update_food(): Owner-only merge update
        - delete_food(): Owner-only permanent delete

    Stateless: every call receives its own session.
    """

    async def _load(
        self,
        db: AsyncSession,
        food_id: str,
        populate: bool = False,
    ) -> Food:
        """Fetches one food by id, optionally with its owner, or raises NotFoundError."""
        food = None
        parsed = _parse_id(food_id)
        if parsed is not None:
            query = select(Food).where(Food.id == parsed)
            if populate:
                query = query.options(selectinload(Food.owner))
            result = await db.execute(query)
            food = result.scalar_one_or_none()
        return handle_404(food, resource="food", resource_id=str(food_id))

    async def list_foods(self, db: AsyncSession) -> FoodListResponse:
        """
        Returns every food with its owner populated.

        Query plan:
            SELECT * FROM foods ORDER BY created_at
            SELECT * FROM users WHERE id IN (...)   ← selectinload
        """
        try:
            result = await db.execute(
                select(Food)
                .options(selectinload(Food.owner))
                .order_by(Food.created_at, Food.id)
            )
            foods = list(result.scalars().all())
            return FoodListResponse(foods=[_to_detail(food) for food in foods])

        except SQLAlchemyError as e:
            logger.error("Database error listing foods: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve foods. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_food(self, db: AsyncSession, food_id: str) -> FoodDetailEnvelope:
        """
        Returns one food with its owner populated.

        Raises:
            NotFoundError: No food with that id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            food = await self._load(db, food_id, populate=True)
            return FoodDetailEnvelope(food=_to_detail(food))

        except FoodShelfError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching food %s: %s", food_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the food. Please try again.",
                context={"food_id": str(food_id)},
            )

    async def create_food(
        self,
        db: AsyncSession,
        payload: FoodCreate,
        owner_id: uuid.UUID,
    ) -> FoodEnvelope:
        """
        Persists a new food owned by `owner_id`.

        The owner always comes from the authenticated user; FoodCreate has
        no owner field, so nothing the client sent can override it.
        """
        try:
            food = Food(
                owner_id=owner_id,
                title=payload.title,
                text=payload.text,
            )
            db.add(food)
            await db.flush()  # Assigns defaults without committing
            logger.info("Food %s created by %s", food.id, owner_id)
            return FoodEnvelope(food=_to_response(food))

        except SQLAlchemyError as e:
            logger.error("Database error creating food: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the food. Please try again.",
                context={"owner_id": str(owner_id), "error_type": type(e).__name__},
            )

    async def update_food(
        self,
        db: AsyncSession,
        food_id: str,
        changes: FoodUpdate,
        requester_id: uuid.UUID,
    ) -> None:
        """
        Merge-updates a food owned by `requester_id`.

        Only fields explicitly present in `changes` are written. Blank
        strings and `owner` have already been stripped from the payload
        by the blank-field dependency before `changes` was validated.

        Raises:
            NotFoundError:  No food with that id (→ 404)
            ForbiddenError: Requester is not the owner (→ 403)
        """
        try:
            food = await self._load(db, food_id)
            require_ownership(requester_id, food)

            fields = changes.model_dump(exclude_unset=True)
            for name, value in fields.items():
                setattr(food, name, value)
            await db.flush()
            logger.info("Food %s updated by %s: %s", food.id, requester_id, sorted(fields))

        except FoodShelfError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating food %s: %s", food_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the food. Please try again.",
                context={"food_id": str(food_id), "error_type": type(e).__name__},
            )

    async def delete_food(
        self,
        db: AsyncSession,
        food_id: str,
        requester_id: uuid.UUID,
    ) -> None:
        """
        Permanently deletes a food owned by `requester_id`.

        A second delete of the same id finds nothing and raises NotFoundError.
        """
        try:
            food = await self._load(db, food_id)
            require_ownership(requester_id, food)

            await db.delete(food)
            await db.flush()
            logger.info("Food %s deleted by %s", food_id, requester_id)

        except FoodShelfError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting food %s: %s", food_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the food. Please try again.",
                context={"food_id": str(food_id), "error_type": type(e).__name__},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
food_service = FoodService()
