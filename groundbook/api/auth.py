"""Signup, login and current user endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from groundbook.api.deps import get_current_user
from groundbook.core.database import get_db
from groundbook.models.user import User
from groundbook.schemas.auth import LoginRequest, SignupRequest, TokenResponse, UserPublic
from groundbook.services.auth_service import auth_service

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(
    profile: SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Create an account.

    The role (``renter`` or ``owner``) is fixed once the account exists.
    Owners may store a UPI id so renters can pay them.

    Returns:
        Bearer token and the created user
    """
    user, token = await auth_service.create_account(db, profile)
    return TokenResponse(token=token, user=UserPublic.model_validate(user))


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Exchange email and password for a bearer token."""
    user, token = await auth_service.authenticate(db, credentials.email, credentials.password)
    return TokenResponse(token=token, user=UserPublic.model_validate(user))


@router.get("/me", response_model=UserPublic)
async def me(user: User = Depends(get_current_user)):
    """Get the user the bearer token belongs to."""
    return user
