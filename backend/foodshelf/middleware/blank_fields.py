"""
FoodShelf Backend — Blank Field Sanitizer
===========================================

What:  Strips empty-string fields from update payloads before validation.
Why:   HTML forms submit untouched inputs as "". For a partial update an
       empty input means "leave it alone", not "set it to empty":
           {"food": {"title": "", "text": "foo"}}  →  {"food": {"text": "foo"}}
How:   remove_blanks() is a pure recursive transform; food_update_payload()
       is the FastAPI dependency that reads the raw JSON body, drops any
       client-supplied `owner`, applies remove_blanks(), and only then
       validates against FoodUpdateRequest.

Only the exact empty string counts as blank. 0, False, None, and lists
(even empty ones) are kept as sent.
"""

import logging
from typing import Any, Dict, Mapping

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from foodshelf.schemas.food import FoodUpdateRequest

logger = logging.getLogger(__name__)


def remove_blanks(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Returns a copy of `payload` without keys whose value is "".

    Nested mappings are cleaned the same way. The input is not modified.
    """
    cleaned: Dict[str, Any] = {}
    for key, value in payload.items():
        if isinstance(value, str) and value == "":
            continue
        if isinstance(value, Mapping):
            value = remove_blanks(value)
        cleaned[key] = value
    return cleaned


async def food_update_payload(request: Request) -> FoodUpdateRequest:
    """
    FastAPI dependency producing a sanitized, validated PATCH body.

    Order matters: `owner` and blank fields are removed before validation,
    so neither can reach FoodUpdate's exclude_unset field set.

    Raises:
        RequestValidationError: Body is not JSON or fails the schema (→ 422)
    """
    try:
        body = await request.json()
    except ValueError:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": None}]
        )

    if isinstance(body, dict):
        food = body.get("food")
        if isinstance(food, dict) and "owner" in food:
            logger.info("Ignoring client-supplied owner in update payload")
            body = {**body, "food": {k: v for k, v in food.items() if k != "owner"}}
        body = remove_blanks(body)

    try:
        return FoodUpdateRequest.model_validate(body)
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False))
