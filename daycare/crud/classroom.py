from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from daycare.models.classroom import AssignmentStatus, Classroom, ClassroomAssignment
from daycare.models.attendance import ChildCheckIn
from daycare.schemas.classroom import ClassroomCreate, ClassroomUpdate
from daycare.utils.timezones import utcnow


async def create_classroom(db: AsyncSession, classroom: ClassroomCreate):
    new_classroom = Classroom(
        name=classroom.name,
        capacity=classroom.capacity,
        age_group=classroom.age_group,
        description=classroom.description,
        is_active=True,
    )
    db.add(new_classroom)
    await db.commit()
    await db.refresh(new_classroom)
    return new_classroom


async def get_classroom(db: AsyncSession, classroom_id: str):
    return await db.get(Classroom, classroom_id)


async def list_active_classrooms(db: AsyncSession):
    result = await db.execute(
        select(Classroom).where(Classroom.is_active == True).order_by(Classroom.name)
    )
    return result.scalars().all()


async def update_classroom(db: AsyncSession, classroom: Classroom, updates: ClassroomUpdate):
    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(classroom, field, value)
    await db.commit()
    await db.refresh(classroom)
    return classroom


async def deactivate_classroom(db: AsyncSession, classroom: Classroom):
    classroom.is_active = False
    await db.commit()
    await db.refresh(classroom)
    return classroom


async def get_active_roster_entry(db: AsyncSession, child_id: str):
    result = await db.execute(
        select(ClassroomAssignment).where(
            ClassroomAssignment.child_id == child_id,
            ClassroomAssignment.status == AssignmentStatus.ACTIVE,
        )
    )
    return result.scalars().first()


async def assign_child(db: AsyncSession, classroom_id: str, child_id: str):
    """Put a child on a classroom roster. A child is on one roster at a time."""
    now = utcnow()
    current = await get_active_roster_entry(db, child_id)
    if current:
        if current.classroom_id == classroom_id:
            return current
        current.status = AssignmentStatus.REMOVED
        current.status_changed_at = now

    entry = ClassroomAssignment(
        child_id=child_id,
        classroom_id=classroom_id,
        status=AssignmentStatus.ACTIVE,
        assigned_at=now,
        status_changed_at=now,
    )
    db.add(entry)
    await db.commit()
    await db.refresh(entry)
    return entry


async def remove_child(db: AsyncSession, classroom_id: str, child_id: str):
    result = await db.execute(
        select(ClassroomAssignment).where(
            ClassroomAssignment.classroom_id == classroom_id,
            ClassroomAssignment.child_id == child_id,
            ClassroomAssignment.status == AssignmentStatus.ACTIVE,
        )
    )
    entry = result.scalars().first()
    if not entry:
        return None
    entry.status = AssignmentStatus.REMOVED
    entry.status_changed_at = utcnow()
    await db.commit()
    await db.refresh(entry)
    return entry


async def get_roster(db: AsyncSession, classroom_id: str):
    result = await db.execute(
        select(ClassroomAssignment).where(
            ClassroomAssignment.classroom_id == classroom_id,
            ClassroomAssignment.status == AssignmentStatus.ACTIVE,
        ).order_by(ClassroomAssignment.assigned_at)
    )
    return result.scalars().all()


async def count_open_check_ins(db: AsyncSession, day, classroom_id: str = None) -> dict:
    """Open check-ins for ``day`` keyed by classroom id."""
    q = (
        select(ChildCheckIn.classroom_id, func.count(ChildCheckIn.id))
        .where(ChildCheckIn.date == day, ChildCheckIn.check_out_time.is_(None))
        .group_by(ChildCheckIn.classroom_id)
    )
    if classroom_id:
        q = q.where(ChildCheckIn.classroom_id == classroom_id)
    res = await db.execute(q)
    return {cid: int(n) for cid, n in res.all()}


async def count_rosters(db: AsyncSession) -> dict:
    res = await db.execute(
        select(ClassroomAssignment.classroom_id, func.count(ClassroomAssignment.id))
        .where(ClassroomAssignment.status == AssignmentStatus.ACTIVE)
        .group_by(ClassroomAssignment.classroom_id)
    )
    return {cid: int(n) for cid, n in res.all()}
