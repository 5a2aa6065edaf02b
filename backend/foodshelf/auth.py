"""
FoodShelf Backend — Bearer Token Authentication
=================================================

What:  FastAPI dependency guarding the mutating routes.
How:   HTTPBearer extracts the token from `Authorization: Bearer <token>`;
       the token is looked up in `users.token`. A match yields the User,
       anything else raises UnauthorizedError (→ 401) before the route
       body runs.
Who:   POST, PATCH, and DELETE /foods routes via Depends(require_token).

Tokens are opaque. Issuing and revoking them belongs to the sign-in flow,
which lives outside this service.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foodshelf.database import get_db_session
from foodshelf.exceptions import UnauthorizedError
from foodshelf.models.user import User

logger = logging.getLogger(__name__)

# auto_error=False: we raise our own UnauthorizedError so the 401 body
# matches every other error response
bearer_scheme = HTTPBearer(auto_error=False, description="Opaque user token")


async def require_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolves the bearer token to the authenticated User."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    result = await db.execute(select(User).where(User.token == credentials.credentials))
    user = result.scalar_one_or_none()

    if user is None:
        logger.info("Rejected unknown bearer token")
        raise UnauthorizedError(message="The bearer token is invalid or has been revoked")

    return user
