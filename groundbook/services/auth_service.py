"""Account creation, login and token resolution."""
import logging
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from groundbook.core.errors import DuplicateContact, InvalidCredentials, Unauthenticated
from groundbook.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from groundbook.models.user import User
from groundbook.schemas.auth import SignupRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Service for managing identities."""

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def create_account(
        self, db: AsyncSession, profile: SignupRequest
    ) -> Tuple[User, str]:
        """
        Register a new user.

        Args:
            db: Database session
            profile: Signup data

        Returns:
            The created user and a bearer token for it

        Raises:
            DuplicateContact: If the email is already registered
        """
        email = profile.email.lower()
        if await self.get_by_email(db, email):
            raise DuplicateContact()

        password_hash = await run_in_threadpool(hash_password, profile.password)
        user = User(
            name=profile.name,
            email=email,
            password_hash=password_hash,
            phone=profile.phone,
            role=profile.role,
            upi_id=profile.upi_id,
        )
        db.add(user)

        try:
            await db.commit()
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email
            await db.rollback()
            raise DuplicateContact()

        await db.refresh(user)
        logger.info(f"Created {user.role.value} account {user.id}")

        return user, create_access_token(user.id)

    async def authenticate(
        self, db: AsyncSession, email: str, password: str
    ) -> Tuple[User, str]:
        """
        Check credentials and issue a token.

        Raises:
            InvalidCredentials: Unknown email or wrong password
        """
        user = await self.get_by_email(db, email)
        if not user:
            raise InvalidCredentials()

        ok = await run_in_threadpool(verify_password, password, user.password_hash)
        if not ok:
            raise InvalidCredentials()

        return user, create_access_token(user.id)

    async def current_identity(self, db: AsyncSession, token: Optional[str]) -> User:
        """
        Resolve a bearer token to its user.

        Raises:
            Unauthenticated: Missing or invalid token, or the user no longer exists
        """
        if not token:
            raise Unauthenticated("No token")

        user_id = decode_access_token(token)
        if user_id is None:
            raise Unauthenticated("Invalid token")

        user = await db.get(User, user_id)
        if not user:
            raise Unauthenticated("Invalid token")

        return user


# Singleton instance
auth_service = AuthService()
