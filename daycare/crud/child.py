from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete
from datetime import date
from daycare.models.child import Child, ChildParent
from daycare.schemas.child import ChildCreate, ChildUpdate, ChildParentCreate


async def create_child(db: AsyncSession, child: ChildCreate):
    new_child = Child(
        first_name=child.first_name,
        last_name=child.last_name,
        date_of_birth=child.date_of_birth,
        is_kindergarten_enrolled=child.is_kindergarten_enrolled,
        allergies=child.allergies,
        medical_notes=child.medical_notes,
        enrollment_date=child.enrollment_date or date.today(),
    )
    db.add(new_child)
    await db.commit()
    await db.refresh(new_child)
    return new_child


async def get_child(db: AsyncSession, child_id: str):
    return await db.get(Child, child_id)


async def list_children(db: AsyncSession):
    result = await db.execute(select(Child).order_by(Child.first_name, Child.last_name))
    return result.scalars().all()


async def get_children_by_ids(db: AsyncSession, ids):
    ids = list(ids)
    if not ids:
        return {}
    result = await db.execute(select(Child).where(Child.id.in_(ids)))
    return {c.id: c for c in result.scalars().all()}


async def update_child(db: AsyncSession, child: Child, updates: ChildUpdate):
    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(child, field, value)
    await db.commit()
    await db.refresh(child)
    return child


async def delete_child(db: AsyncSession, child_id: str):
    await db.execute(delete(Child).where(Child.id == child_id))
    await db.commit()


async def link_parent(db: AsyncSession, child_id: str, link: ChildParentCreate):
    cp = ChildParent(
        child_id=child_id,
        parent_id=link.parent_id,
        relationship_label=link.relationship,
        is_primary=link.is_primary,
    )
    db.add(cp)
    await db.commit()
    await db.refresh(cp)
    return cp


async def is_parent_of(db: AsyncSession, parent_id: str, child_id: str) -> bool:
    result = await db.execute(
        select(ChildParent.id).where(
            ChildParent.parent_id == parent_id,
            ChildParent.child_id == child_id,
        )
    )
    return result.first() is not None


async def list_children_for_parent(db: AsyncSession, parent_id: str):
    result = await db.execute(
        select(Child)
        .join(ChildParent, ChildParent.child_id == Child.id)
        .where(ChildParent.parent_id == parent_id)
        .order_by(Child.first_name, Child.last_name)
    )
    return result.scalars().all()
