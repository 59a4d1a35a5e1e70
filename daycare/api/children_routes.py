import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from daycare.auth.dependencies import get_current_user, require_care_staff, require_director
from daycare.crud import child as child_crud
from daycare.crud import daily_report as report_crud
from daycare.crud.user_profile import get_profile
from daycare.db import get_db
from daycare.models.child import Child
from daycare.models.user_profile import UserProfile
from daycare.schemas.attendance import ChildAttendanceRecord
from daycare.schemas.child import ChildCreate, ChildParentCreate, ChildParentRead, ChildRead, ChildUpdate
from daycare.schemas.daily_report import DailyReportRead
from daycare.services import attendance_service
from daycare.services.ratio_engine import calculate_age_in_months, classify_ratio_group
from daycare.utils.timezones import center_today

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/children", tags=["children"])


def to_child_read(child: Child) -> ChildRead:
    age = calculate_age_in_months(child.date_of_birth, center_today())
    return ChildRead(
        id=child.id,
        first_name=child.first_name,
        last_name=child.last_name,
        date_of_birth=child.date_of_birth,
        is_kindergarten_enrolled=child.is_kindergarten_enrolled,
        allergies=child.allergies,
        medical_notes=child.medical_notes,
        enrollment_date=child.enrollment_date,
        age_in_months=age,
        ratio_group=classify_ratio_group(age, child.is_kindergarten_enrolled),
    )


async def _get_visible_child(db: AsyncSession, child_id: str, user: UserProfile) -> Child:
    """Staff and directors see every child; parents only their own."""
    child = await child_crud.get_child(db, child_id)
    if not child:
        raise HTTPException(status_code=404, detail="Child not found")
    if user.role == "parent" and not await child_crud.is_parent_of(db, user.id, child_id):
        raise HTTPException(status_code=403, detail="Not your child")
    return child


@router.get("", response_model=List[ChildRead])
async def list_children(db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    return [to_child_read(c) for c in await child_crud.list_children(db)]


@router.post("", response_model=ChildRead, status_code=201)
async def create_child(
    body: ChildCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    child = await child_crud.create_child(db, body)
    log.info("child created: id=%s by=%s", child.id, user.id)
    return to_child_read(child)


@router.get("/{child_id}", response_model=ChildRead)
async def get_child(child_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return to_child_read(await _get_visible_child(db, child_id, user))


@router.patch("/{child_id}", response_model=ChildRead)
async def update_child(
    child_id: str,
    body: ChildUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    child = await child_crud.get_child(db, child_id)
    if not child:
        raise HTTPException(status_code=404, detail="Child not found")
    return to_child_read(await child_crud.update_child(db, child, body))


@router.delete("/{child_id}")
async def delete_child(child_id: str, db: AsyncSession = Depends(get_db), user=Depends(require_director)):
    child = await child_crud.get_child(db, child_id)
    if not child:
        raise HTTPException(status_code=404, detail="Child not found")
    await child_crud.delete_child(db, child_id)
    log.info("child deleted: id=%s by=%s", child_id, user.id)
    return {"ok": True}


@router.post("/{child_id}/parents", response_model=ChildParentRead, status_code=201)
async def link_parent(
    child_id: str,
    body: ChildParentCreate,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_director),
):
    if not await child_crud.get_child(db, child_id):
        raise HTTPException(status_code=404, detail="Child not found")
    parent = await get_profile(db, body.parent_id)
    if not parent or parent.role != "parent":
        raise HTTPException(status_code=404, detail="Parent not found")
    try:
        link = await child_crud.link_parent(db, child_id, body)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="Parent already linked to this child")
    return ChildParentRead(
        id=link.id,
        child_id=link.child_id,
        parent_id=link.parent_id,
        relationship=link.relationship_label,
        is_primary=link.is_primary,
    )


@router.get("/{child_id}/attendance", response_model=List[ChildAttendanceRecord])
async def child_attendance(
    child_id: str,
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    await _get_visible_child(db, child_id, user)
    records = await attendance_service.child_attendance_history(db, child_id, start_date, end_date)
    return [
        ChildAttendanceRecord(
            date=r.date,
            classroom_id=r.classroom_id,
            check_in_time=r.check_in_time,
            check_out_time=r.check_out_time,
            total_hours=float(r.total_hours) if r.total_hours is not None else None,
        )
        for r in records
    ]


@router.get("/{child_id}/daily-reports", response_model=List[DailyReportRead])
async def child_daily_reports(
    child_id: str,
    limit: int = Query(default=30, ge=1, le=365),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    await _get_visible_child(db, child_id, user)
    return await report_crud.list_reports_for_child(db, child_id, limit)
