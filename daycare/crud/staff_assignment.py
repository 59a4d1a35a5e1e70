from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from daycare.models.classroom import AssignmentStatus, StaffClassroomAssignment
from daycare.utils.timezones import utcnow


async def get_assignment(db: AsyncSession, assignment_id: str):
    return await db.get(StaffClassroomAssignment, assignment_id)


async def get_active_assignment(db: AsyncSession, staff_id: str, classroom_id: str):
    result = await db.execute(
        select(StaffClassroomAssignment).where(
            StaffClassroomAssignment.staff_id == staff_id,
            StaffClassroomAssignment.classroom_id == classroom_id,
            StaffClassroomAssignment.status == AssignmentStatus.ACTIVE,
        )
    )
    return result.scalars().first()


async def create_assignment(db: AsyncSession, staff_id: str, classroom_id: str):
    now = utcnow()
    assignment = StaffClassroomAssignment(
        staff_id=staff_id,
        classroom_id=classroom_id,
        status=AssignmentStatus.ACTIVE,
        assigned_at=now,
        status_changed_at=now,
    )
    db.add(assignment)
    await db.commit()
    await db.refresh(assignment)
    return assignment


async def remove_assignment(db: AsyncSession, assignment: StaffClassroomAssignment):
    assignment.status = AssignmentStatus.REMOVED
    assignment.status_changed_at = utcnow()
    await db.commit()
    await db.refresh(assignment)
    return assignment


async def list_active_for_classroom(db: AsyncSession, classroom_id: str):
    result = await db.execute(
        select(StaffClassroomAssignment).where(
            StaffClassroomAssignment.classroom_id == classroom_id,
            StaffClassroomAssignment.status == AssignmentStatus.ACTIVE,
        ).order_by(StaffClassroomAssignment.assigned_at)
    )
    return result.scalars().all()


async def list_active_for_staff(db: AsyncSession, staff_id: str):
    result = await db.execute(
        select(StaffClassroomAssignment).where(
            StaffClassroomAssignment.staff_id == staff_id,
            StaffClassroomAssignment.status == AssignmentStatus.ACTIVE,
        ).order_by(StaffClassroomAssignment.assigned_at)
    )
    return result.scalars().all()


async def list_all_active(db: AsyncSession):
    result = await db.execute(
        select(StaffClassroomAssignment).where(
            StaffClassroomAssignment.status == AssignmentStatus.ACTIVE,
        )
    )
    return result.scalars().all()
