import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from daycare.auth.dependencies import get_current_user
from daycare.db import get_db
from daycare.models.user_profile import UserProfile
from daycare.schemas.user_profile import LoginRequest, UserProfileRead

log = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=UserProfileRead)
async def login(request: Request, body: LoginRequest, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(UserProfile).where(UserProfile.pin_code == body.pin_code, UserProfile.is_active == True)
    )
    user = result.scalar_one_or_none()
    if not user:
        log.warning("login rejected: unknown PIN")
        raise HTTPException(status_code=401, detail="Invalid PIN")

    request.session["user_id"] = user.id
    request.session["role"] = user.role
    log.info("login: user=%s role=%s", user.id, user.role)
    return user


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"ok": True}


@router.get("/me", response_model=UserProfileRead)
async def whoami(user: UserProfile = Depends(get_current_user)):
    return user
