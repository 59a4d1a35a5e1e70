from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from daycare.models.user_profile import UserProfile
from daycare.schemas.user_profile import UserProfileCreate


async def get_profile(db: AsyncSession, user_id: str):
    return await db.get(UserProfile, user_id)


async def create_profile(db: AsyncSession, profile: UserProfileCreate):
    new_profile = UserProfile(
        first_name=profile.first_name,
        last_name=profile.last_name,
        role=profile.role,
        pin_code=profile.pin_code,
        phone=profile.phone,
        is_active=True,
    )
    db.add(new_profile)
    await db.commit()
    await db.refresh(new_profile)
    return new_profile


async def list_staff(db: AsyncSession):
    """Active staff and directors, by name"""
    result = await db.execute(
        select(UserProfile)
        .where(UserProfile.role.in_(("staff", "director")), UserProfile.is_active == True)
        .order_by(UserProfile.last_name, UserProfile.first_name)
    )
    return result.scalars().all()


async def get_profiles_by_ids(db: AsyncSession, ids):
    ids = list(ids)
    if not ids:
        return {}
    result = await db.execute(select(UserProfile).where(UserProfile.id.in_(ids)))
    return {p.id: p for p in result.scalars().all()}
