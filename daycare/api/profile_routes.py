import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from daycare.auth.dependencies import require_care_staff, require_director
from daycare.crud import user_profile as profile_crud
from daycare.db import get_db
from daycare.schemas.user_profile import UserProfileCreate, UserProfileRead

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.post("", response_model=UserProfileRead, status_code=201)
async def create_profile(
    body: UserProfileCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_director),
):
    try:
        profile = await profile_crud.create_profile(db, body)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="PIN already in use")
    log.info("profile created: id=%s role=%s by=%s", profile.id, profile.role, user.id)
    return profile


@router.get("/staff", response_model=List[UserProfileRead])
async def list_staff(db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    """Active staff and directors"""
    return await profile_crud.list_staff(db)
