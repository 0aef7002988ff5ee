"""Ground listing management."""
import logging
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from groundbook.core.errors import Forbidden, ForbiddenRole, NotFound
from groundbook.models.ground import Ground
from groundbook.models.user import User
from groundbook.schemas.ground import GroundCreate, GroundUpdate
from groundbook.services.storage import upload_storage

logger = logging.getLogger(__name__)


def require_owner(user: User) -> None:
    """Raise ForbiddenRole unless the user is an owner."""
    if not user.is_owner:
        raise ForbiddenRole("Not owner")


class GroundService:
    """Service for managing grounds."""

    async def list_available(
        self, db: AsyncSession, sport: Optional[str] = None
    ) -> List[Ground]:
        """
        List grounds that can currently be booked.

        Args:
            db: Database session
            sport: Only return grounds tagged with this sport (case-insensitive)

        Returns:
            Available grounds with their owners loaded
        """
        result = await db.execute(
            select(Ground)
            .options(selectinload(Ground.owner))
            .where(Ground.available.is_(True))
            .order_by(Ground.id)
        )
        grounds = list(result.scalars().all())

        # Tags are a JSON list, filtered here to stay portable across databases
        if sport:
            wanted = sport.strip().lower()
            grounds = [
                g for g in grounds
                if any(tag.lower() == wanted for tag in (g.sport_tags or []))
            ]

        return grounds

    async def list_by_owner(self, db: AsyncSession, owner: User) -> List[Ground]:
        """List every ground of an owner, available or not."""
        require_owner(owner)
        result = await db.execute(
            select(Ground)
            .options(selectinload(Ground.owner))
            .where(Ground.owner_id == owner.id)
            .order_by(Ground.id)
        )
        return list(result.scalars().all())

    async def get_by_id(
        self, db: AsyncSession, ground_id: int, for_update: bool = False
    ) -> Ground:
        """
        Get a ground by id.

        Raises:
            NotFound: If the ground does not exist
        """
        query = (
            select(Ground)
            .options(selectinload(Ground.owner))
            .where(Ground.id == ground_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()

        result = await db.execute(query)
        ground = result.scalar_one_or_none()

        if not ground:
            raise NotFound("Ground not found")

        return ground

    async def create(self, db: AsyncSession, owner: User, fields: GroundCreate) -> Ground:
        """Create a ground owned by the caller. New grounds are available."""
        require_owner(owner)

        ground = Ground(owner_id=owner.id, available=True)
        self._apply(ground, fields.model_dump())
        db.add(ground)
        await db.commit()

        logger.info(f"Owner {owner.id} listed ground {ground.id}")
        return await self.get_by_id(db, ground.id)

    async def update(
        self, db: AsyncSession, ground_id: int, owner: User, patch: GroundUpdate
    ) -> Ground:
        """
        Update a ground.

        Raises:
            ForbiddenRole: If the caller is not an owner
            NotFound: If the ground does not exist
            Forbidden: If the caller does not own the ground
        """
        require_owner(owner)
        ground = await self.get_by_id(db, ground_id)
        if ground.owner_id != owner.id:
            raise Forbidden("Not owner")

        self._apply(ground, patch.model_dump(exclude_unset=True))
        await db.commit()

        return await self.get_by_id(db, ground_id)

    async def add_images(
        self,
        db: AsyncSession,
        ground_id: int,
        owner: User,
        thumbnail: Optional[UploadFile] = None,
        images: Optional[List[UploadFile]] = None,
    ) -> Ground:
        """Store uploaded media and attach it to a ground."""
        require_owner(owner)
        ground = await self.get_by_id(db, ground_id)
        if ground.owner_id != owner.id:
            raise Forbidden("Not owner")

        if thumbnail is not None:
            ground.thumbnail = await upload_storage.save(thumbnail)

        stored = [await upload_storage.save(image) for image in images or []]
        if stored:
            # Reassign so the JSON column is marked dirty
            ground.images = list(ground.images or []) + stored

        await db.commit()
        return await self.get_by_id(db, ground_id)

    def set_available(self, ground: Ground, available: bool) -> None:
        """
        Flip a ground's availability.

        Does not commit: callers write it together with their own changes.
        """
        ground.available = available

    def _apply(self, ground: Ground, data: dict) -> None:
        # Nested keys missing from a partial update keep their current values
        price = data.pop("price", None)
        if price is not None:
            ground.price_amount = price.get("amount", ground.price_amount)
            ground.price_currency = price.get("currency", ground.price_currency)
            ground.price_negotiable = price.get("negotiable", ground.price_negotiable)

        location = data.pop("location", None)
        if location is not None:
            ground.address = location.get("address", ground.address)
            ground.latitude = location.get("lat", ground.latitude)
            ground.longitude = location.get("lng", ground.longitude)

        for field, value in data.items():
            setattr(ground, field, value)


# Singleton instance
ground_service = GroundService()
