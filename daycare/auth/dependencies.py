# auth/dependencies.py
from fastapi import Request, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from daycare.db import get_db
from daycare.models.user_profile import UserProfile


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> UserProfile:
    user_id = request.session.get("user_id")
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")

    result = await db.execute(select(UserProfile).where(UserProfile.id == user_id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active:
        request.session.clear()
        raise HTTPException(status_code=401, detail="Session is no longer valid")
    return user


def require_roles(*roles: str):
    """Dependency factory: the session user, provided their role is in ``roles``."""
    allowed = frozenset(roles)

    async def _dep(user: UserProfile = Depends(get_current_user)) -> UserProfile:
        if user.role not in allowed:
            raise HTTPException(
                status_code=403,
                detail=f"Requires role: {', '.join(sorted(allowed))}",
            )
        return user
    return _dep


require_director = require_roles("director")
require_care_staff = require_roles("staff", "director")


def require_self_or_roles(path_param: str, *roles: str):
    """The session user, when the path names them or their role is in ``roles``."""
    allowed = frozenset(roles)

    async def _dep(request: Request, user: UserProfile = Depends(get_current_user)) -> UserProfile:
        if user.id != request.path_params.get(path_param) and user.role not in allowed:
            raise HTTPException(status_code=403, detail="Not allowed to access another user's records")
        return user
    return _dep
