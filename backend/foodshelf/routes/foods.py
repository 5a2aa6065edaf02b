"""
FoodShelf Backend — Foods Route Handlers
==========================================

What:  The five REST handlers for the foods resource.
How:   Each handler extracts what it needs from the request, delegates to
       FoodService, and picks the status code. Errors are not caught here;
       they propagate to the handlers registered in main.py.

Route Table:
    GET    /foods          list     public          200 {"foods": [...]}
    GET    /foods/{id}     show     public          200 {"food": {...}}
    POST   /foods          create   bearer token    201 {"food": {...}}
    PATCH  /foods/{id}     update   bearer + owner  204
    DELETE /foods/{id}     destroy  bearer + owner  204
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from foodshelf.auth import require_token
from foodshelf.database import get_db_session
from foodshelf.middleware.blank_fields import food_update_payload
from foodshelf.models.user import User
from foodshelf.schemas.common import ErrorResponse
from foodshelf.schemas.food import (
    FoodCreateRequest,
    FoodDetailEnvelope,
    FoodEnvelope,
    FoodListResponse,
    FoodUpdateRequest,
)
from foodshelf.services.food_service import food_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Foods"])

_AUTH_ERRORS = {
    401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
}
_OWNED_ERRORS = {
    **_AUTH_ERRORS,
    403: {"description": "Caller does not own this food", "model": ErrorResponse},
    404: {"description": "Food not found", "model": ErrorResponse},
}


# INDEX
@router.get(
    "/foods",
    response_model=FoodListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all foods",
)
async def list_foods(db: AsyncSession = Depends(get_db_session)) -> FoodListResponse:
    """Every food, each with its owner populated."""
    return await food_service.list_foods(db)


# SHOW
@router.get(
    "/foods/{food_id}",
    response_model=FoodDetailEnvelope,
    responses={404: {"description": "Food not found", "model": ErrorResponse}},
    summary="Get a single food by ID",
)
async def get_food(
    food_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> FoodDetailEnvelope:
    """
    One food with its owner populated.

    `food_id` is taken as a plain string: an id that is not a UUID simply
    matches nothing and yields 404 rather than a 422.
    """
    return await food_service.get_food(db, food_id)


# CREATE
@router.post(
    "/foods",
    status_code=201,
    response_model=FoodEnvelope,
    responses=_AUTH_ERRORS,
    summary="Create a food owned by the caller",
)
async def create_food(
    payload: FoodCreateRequest,
    user: User = Depends(require_token),
    db: AsyncSession = Depends(get_db_session),
) -> FoodEnvelope:
    """Creates a food whose owner is always the authenticated user."""
    return await food_service.create_food(db, payload.food, owner_id=user.id)


# UPDATE
@router.patch(
    "/foods/{food_id}",
    status_code=204,
    response_class=Response,
    responses=_OWNED_ERRORS,
    summary="Partially update a food you own",
    description=(
        "Body: {\"food\": {...}}. Only the fields sent are changed. Fields sent as "
        "an empty string are ignored, and `owner` can never be changed."
    ),
)
async def update_food(
    food_id: str,
    user: User = Depends(require_token),
    payload: FoodUpdateRequest = Depends(food_update_payload),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    # require_token is declared first so an anonymous caller gets 401, not 422
    await food_service.update_food(db, food_id, payload.food, requester_id=user.id)
    return Response(status_code=204)


# DESTROY
@router.delete(
    "/foods/{food_id}",
    status_code=204,
    response_class=Response,
    responses=_OWNED_ERRORS,
    summary="Delete a food you own",
)
async def delete_food(
    food_id: str,
    user: User = Depends(require_token),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await food_service.delete_food(db, food_id, requester_id=user.id)
    return Response(status_code=204)
