import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from daycare.auth.dependencies import require_care_staff, require_director, require_self_or_roles
from daycare.core.constants import CARE_ROLES
from daycare.crud import classroom as classroom_crud
from daycare.crud import staff_assignment as assignment_crud
from daycare.crud.user_profile import get_profile
from daycare.db import get_db
from daycare.models.classroom import AssignmentStatus
from daycare.models.user_profile import UserProfile
from daycare.schemas.ratio import (
    ClassroomRatioResponse,
    RatioOverviewResponse,
    StaffAssignmentCreate,
    StaffAssignmentRead,
    StaffAssignmentsResponse,
    StaffClassroomAssignmentItem,
)
from daycare.services import ratio_service

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ratio", tags=["ratio"])


# ==================== STAFF ASSIGNMENTS ====================

@router.post("/staff-assignments", response_model=StaffAssignmentRead, status_code=201)
async def create_staff_assignment(
    body: StaffAssignmentCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_director),
):
    staff = await get_profile(db, body.staff_id)
    if not staff or staff.role not in CARE_ROLES:
        raise HTTPException(status_code=404, detail="Staff member not found")

    classroom = await classroom_crud.get_classroom(db, body.classroom_id)
    if not classroom or not classroom.is_active:
        raise HTTPException(status_code=404, detail="Classroom not found")

    if await assignment_crud.get_active_assignment(db, body.staff_id, body.classroom_id):
        raise HTTPException(status_code=400, detail="Staff member is already assigned to this classroom")

    assignment = await assignment_crud.create_assignment(db, body.staff_id, body.classroom_id)
    log.info(
        "staff assigned: staff=%s classroom=%s assignment=%s by=%s",
        body.staff_id, body.classroom_id, assignment.id, user.id,
    )
    return assignment


@router.delete("/staff-assignments/{assignment_id}", response_model=StaffAssignmentRead)
async def remove_staff_assignment(
    assignment_id: str,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_director),
):
    assignment = await assignment_crud.get_assignment(db, assignment_id)
    if not assignment:
        raise HTTPException(status_code=404, detail="Assignment not found")
    if assignment.status != AssignmentStatus.ACTIVE:
        raise HTTPException(status_code=400, detail="Assignment already removed")

    assignment = await assignment_crud.remove_assignment(db, assignment)
    log.info("staff assignment removed: assignment=%s by=%s", assignment_id, user.id)
    return assignment


@router.get("/staff/{staff_id}/assignments", response_model=StaffAssignmentsResponse)
async def staff_assignments(
    staff_id: str,
    db: AsyncSession = Depends(get_db),
    user: UserProfile = Depends(require_self_or_roles("staff_id", "director")),
):
    staff = await get_profile(db, staff_id)
    if not staff:
        raise HTTPException(status_code=404, detail="Staff member not found")

    items = []
    for a in await assignment_crud.list_active_for_staff(db, staff_id):
        classroom = await classroom_crud.get_classroom(db, a.classroom_id)
        items.append(
            StaffClassroomAssignmentItem(
                assignment_id=a.id,
                classroom_id=a.classroom_id,
                classroom_name=classroom.name if classroom else "Unknown",
                assigned_at=a.assigned_at,
            )
        )
    return StaffAssignmentsResponse(staff_id=staff.id, staff_name=staff.full_name, assignments=items)


# ==================== RATIO STATUS ====================

@router.get("/classroom/{classroom_id}", response_model=ClassroomRatioResponse)
async def classroom_ratio(classroom_id: str, db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    classroom = await classroom_crud.get_classroom(db, classroom_id)
    if not classroom:
        raise HTTPException(status_code=404, detail="Classroom not found")
    return await ratio_service.classroom_ratio_status(db, classroom)


@router.get("/overview", response_model=RatioOverviewResponse)
async def overview(db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    return await ratio_service.ratio_overview(db)
