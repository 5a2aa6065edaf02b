"""
FoodShelf Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract for the foods resource.
Why:   Input validation, serialization, and OpenAPI doc generation.
How:   FastAPI validates request bodies against the *Request models and
       serializes handler return values through the response models.

Envelopes:
    Every body is wrapped in a resource key, mirroring the REST contract:
        GET  /foods        → {"foods": [...]}
        GET  /foods/{id}   → {"food": {...}}     (owner populated)
        POST /foods        ← {"food": {...}}  →  {"food": {...}}  (owner id)
        PATCH /foods/{id}  ← {"food": {...partial}}

Owner handling:
    None of the input models declare `owner`, and extra keys are ignored,
    so a client-supplied owner never reaches the service layer.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class OwnerResponse(BaseModel):
    """
    What:  Public view of a user, used when a food's owner is populated.
    Why:   The token column must never leave the server.
    """
    id: uuid.UUID = Field(description="User identifier")
    email: str = Field(description="User email address")
    created_at: datetime = Field(description="When the user was created (UTC)")

    model_config = {"from_attributes": True}


class FoodResponse(BaseModel):
    """
    What:  A food with `owner` as a bare user id.
    Who:   Returned by POST /foods, where the owner is the caller.
    """
    id: uuid.UUID = Field(description="Unique food identifier (UUID)")
    owner: uuid.UUID = Field(description="ID of the user who created the food")
    title: str = Field(description="Food title")
    text: Optional[str] = Field(default=None, description="Free-form description")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last modification timestamp (UTC)")


class FoodDetailResponse(BaseModel):
    """
    What:  A food with its owner populated into the full public user record.
    Who:   Returned by GET /foods and GET /foods/{id}.
    """
    id: uuid.UUID = Field(description="Unique food identifier (UUID)")
    owner: OwnerResponse = Field(description="The user who created the food")
    title: str = Field(description="Food title")
    text: Optional[str] = Field(default=None, description="Free-form description")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last modification timestamp (UTC)")


class FoodEnvelope(BaseModel):
    food: FoodResponse


class FoodDetailEnvelope(BaseModel):
    food: FoodDetailResponse


class FoodListResponse(BaseModel):
    """
    What:  Every stored food, owners populated.
    Why no pagination: The resource is small by design; the envelope leaves
           room for pagination fields later without breaking clients.
    """
    foods: List[FoodDetailResponse] = Field(description="All foods, oldest first")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class FoodCreate(BaseModel):
    """Fields a client may set when creating a food."""
    title: str = Field(min_length=1, max_length=255, description="Food title")
    text: Optional[str] = Field(default=None, description="Free-form description")

    model_config = {"extra": "ignore"}


class FoodCreateRequest(BaseModel):
    food: FoodCreate


class FoodUpdate(BaseModel):
    """
    What:  Partial update — only the fields present are changed.
    How:   The service applies model_dump(exclude_unset=True), so omitted
           fields (including those the blank-field sanitizer removed) keep
           their stored value.
    """
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    text: Optional[str] = Field(default=None)

    model_config = {"extra": "ignore"}

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: Optional[str]) -> str:
        """`title` may be omitted but never explicitly cleared."""
        if v is None:
            raise ValueError("title cannot be null")
        return v


class FoodUpdateRequest(BaseModel):
    food: FoodUpdate
