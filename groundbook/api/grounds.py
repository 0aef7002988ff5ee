"""Ground endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from groundbook.api.deps import get_current_user
from groundbook.core.database import get_db
from groundbook.models.user import User
from groundbook.schemas.ground import GroundCreate, GroundUpdate, GroundInDB
from groundbook.services.ground_service import ground_service

router = APIRouter(prefix="/api/grounds", tags=["grounds"])


@router.get("", response_model=List[GroundInDB])
async def list_available_grounds(
    sport: Optional[str] = Query(default=None, description="Only grounds tagged with this sport"),
    db: AsyncSession = Depends(get_db),
):
    """
    List grounds that can be booked right now.

    Grounds with a confirmed booking are hidden until a booking for them is
    rejected or the owner marks them available again.
    """
    return await ground_service.list_available(db, sport=sport)


@router.get("/owner", response_model=List[GroundInDB])
async def list_my_grounds(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List all grounds of the calling owner, available or not."""
    return await ground_service.list_by_owner(db, user)


@router.get("/{ground_id}", response_model=GroundInDB)
async def get_ground(
    ground_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a ground by ID, whether or not it is available."""
    return await ground_service.get_by_id(db, ground_id)


@router.post("", response_model=GroundInDB, status_code=201)
async def create_ground(
    ground: GroundCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List a new ground.

    Only owners can list grounds. New grounds start out available. Upload
    pictures afterwards with ``POST /api/grounds/{id}/images``.
    """
    return await ground_service.create(db, user, ground)


@router.patch("/{ground_id}", response_model=GroundInDB)
async def update_ground(
    ground_id: int,
    ground_update: GroundUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update a ground or toggle its availability.

    Args:
        ground_id: Ground ID
        ground_update: Fields to update
    """
    return await ground_service.update(db, ground_id, user, ground_update)


@router.post("/{ground_id}/images", response_model=GroundInDB)
async def upload_ground_images(
    ground_id: int,
    thumbnail: Optional[UploadFile] = File(default=None),
    images: List[UploadFile] = File(default=[]),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Upload a thumbnail and/or up to 10 pictures of a ground."""
    return await ground_service.add_images(
        db, ground_id, user, thumbnail=thumbnail, images=images[:10]
    )
