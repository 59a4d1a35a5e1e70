import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from daycare.auth.dependencies import require_care_staff, require_director
from daycare.crud import child as child_crud
from daycare.crud import classroom as classroom_crud
from daycare.db import get_db
from daycare.schemas.attendance import AttendanceResult, CheckedInChild, CheckInRequest, CheckOutRequest
from daycare.schemas.classroom import (
    ChildRosterRequest,
    ClassroomCreate,
    ClassroomDetail,
    ClassroomOccupancy,
    ClassroomRead,
    ClassroomUpdate,
    RosterChild,
)
from daycare.services import attendance_service
from daycare.utils.timezones import center_today

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/classrooms", tags=["classrooms"])


async def _get_classroom_or_404(db: AsyncSession, classroom_id: str):
    classroom = await classroom_crud.get_classroom(db, classroom_id)
    if not classroom:
        raise HTTPException(status_code=404, detail="Classroom not found")
    return classroom


# ==================== CLASSROOM MANAGEMENT ====================

@router.post("", response_model=ClassroomRead, status_code=201)
async def create_classroom(
    body: ClassroomCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    classroom = await classroom_crud.create_classroom(db, body)
    log.info("classroom created: id=%s name=%s by=%s", classroom.id, classroom.name, user.id)
    return classroom


@router.get("", response_model=List[ClassroomOccupancy])
async def list_classrooms(db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    """Active classrooms with today's occupancy"""
    classrooms = await classroom_crud.list_active_classrooms(db)
    checked_in = await classroom_crud.count_open_check_ins(db, center_today())
    enrolled = await classroom_crud.count_rosters(db)
    return [
        ClassroomOccupancy(
            id=c.id,
            name=c.name,
            capacity=c.capacity,
            age_group=c.age_group,
            description=c.description,
            is_active=c.is_active,
            checked_in_count=checked_in.get(c.id, 0),
            enrolled_count=enrolled.get(c.id, 0),
        )
        for c in classrooms
    ]


@router.get("/{classroom_id}", response_model=ClassroomDetail)
async def get_classroom(classroom_id: str, db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    classroom = await _get_classroom_or_404(db, classroom_id)
    roster = await classroom_crud.get_roster(db, classroom_id)
    children = await child_crud.get_children_by_ids(db, {r.child_id for r in roster})
    checked_in = await classroom_crud.count_open_check_ins(db, center_today(), classroom_id)

    return ClassroomDetail(
        id=classroom.id,
        name=classroom.name,
        capacity=classroom.capacity,
        age_group=classroom.age_group,
        description=classroom.description,
        is_active=classroom.is_active,
        checked_in_count=checked_in.get(classroom_id, 0),
        roster=[
            RosterChild(
                assignment_id=r.id,
                child_id=r.child_id,
                name=children[r.child_id].full_name if r.child_id in children else "Unknown",
                assigned_at=r.assigned_at,
            )
            for r in roster
        ],
    )


@router.patch("/{classroom_id}", response_model=ClassroomRead)
async def update_classroom(
    classroom_id: str,
    body: ClassroomUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    classroom = await _get_classroom_or_404(db, classroom_id)
    return await classroom_crud.update_classroom(db, classroom, body)


@router.delete("/{classroom_id}", response_model=ClassroomRead)
async def deactivate_classroom(classroom_id: str, db: AsyncSession = Depends(get_db), user=Depends(require_director)):
    classroom = await _get_classroom_or_404(db, classroom_id)
    log.info("classroom deactivated: id=%s by=%s", classroom_id, user.id)
    return await classroom_crud.deactivate_classroom(db, classroom)


@router.post("/{classroom_id}/assign-child")
async def assign_child(
    classroom_id: str,
    body: ChildRosterRequest,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    await _get_classroom_or_404(db, classroom_id)
    if not await child_crud.get_child(db, body.child_id):
        raise HTTPException(status_code=404, detail="Child not found")
    entry = await classroom_crud.assign_child(db, classroom_id, body.child_id)
    return {"ok": True, "assignment_id": entry.id}


@router.post("/{classroom_id}/remove-child")
async def remove_child(
    classroom_id: str,
    body: ChildRosterRequest,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    entry = await classroom_crud.remove_child(db, classroom_id, body.child_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Child is not on this classroom roster")
    return {"ok": True, "assignment_id": entry.id}


# ==================== CHILD CHECK-IN / CHECK-OUT ====================

@router.post("/{classroom_id}/check-in", response_model=AttendanceResult, status_code=201)
async def check_in(
    classroom_id: str,
    body: CheckInRequest,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    entry = await attendance_service.check_in_child(db, classroom_id, body.child_id, user.id, body.notes)
    return AttendanceResult(id=entry.id)


@router.post("/{classroom_id}/check-out", response_model=AttendanceResult)
async def check_out(
    classroom_id: str,
    body: CheckOutRequest,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    entry = await attendance_service.check_out_child(db, body.child_id, user.id, classroom_id)
    return AttendanceResult(id=entry.id, total_hours=float(entry.total_hours))


@router.get("/{classroom_id}/checked-in", response_model=List[CheckedInChild])
async def checked_in(classroom_id: str, db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    await _get_classroom_or_404(db, classroom_id)
    rows = await attendance_service.list_checked_in(db, classroom_id)
    return [
        CheckedInChild(child_id=child.id, name=child.full_name, check_in_time=entry.check_in_time)
        for entry, child in rows
    ]
