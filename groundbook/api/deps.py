"""Shared endpoint dependencies."""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from groundbook.core.database import get_db
from groundbook.models.user import User
from groundbook.services.auth_service import auth_service

# auto_error is off so a missing header surfaces as our own Unauthenticated error
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the bearer token of the request to a user."""
    token = credentials.credentials if credentials else None
    return await auth_service.current_identity(db, token)
