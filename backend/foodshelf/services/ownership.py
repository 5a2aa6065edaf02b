"""
FoodShelf Backend — Lookup and Ownership Guards
=================================================

What:  Two pure checks composed into every lookup that needs them.
       handle_404():        None → NotFoundError, anything else passes through
       require_ownership(): raises ForbiddenError unless the requester owns it
Why:   Keeps the "does it exist / may you touch it" decisions in one place
       and free of HTTP knowledge; main.py maps the exceptions to 404/403.
"""

import uuid
from typing import Optional, Protocol, TypeVar

from foodshelf.exceptions import ForbiddenError, NotFoundError


class Owned(Protocol):
    owner_id: uuid.UUID


T = TypeVar("T")


def handle_404(
    record: Optional[T],
    resource: str = "resource",
    resource_id: Optional[str] = None,
) -> T:
    """Returns `record` unchanged, or raises NotFoundError if it is None."""
    if record is None:
        raise NotFoundError(resource=resource, resource_id=resource_id)
    return record


def require_ownership(requester_id: uuid.UUID, record: Owned) -> None:
    """
    Raises ForbiddenError when `requester_id` is not the record's owner.

    Both sides are compared as strings so a UUID and its text form match.
    """
    if str(record.owner_id) != str(requester_id):
        raise ForbiddenError(
            context={
                "owner_id": str(record.owner_id),
                "requester_id": str(requester_id),
            },
        )
