from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from daycare.auth.dependencies import require_care_staff
from daycare.crud.user_profile import get_profiles_by_ids
from daycare.db import get_db
from daycare.schemas.attendance import AttendanceResult, SignedInStaff, SignInRequest, StaffAttendanceRecord
from daycare.services import attendance_service

router = APIRouter(prefix="/api/staff", tags=["staff-attendance"])


@router.post("/sign-in", response_model=AttendanceResult, status_code=201)
async def sign_in(
    body: Optional[SignInRequest] = None,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    entry = await attendance_service.sign_in_staff(db, user.id, body.notes if body else None)
    return AttendanceResult(id=entry.id)


@router.post("/sign-out", response_model=AttendanceResult)
async def sign_out(db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    entry = await attendance_service.sign_out_staff(db, user.id)
    return AttendanceResult(id=entry.id, total_hours=float(entry.total_hours))


@router.get("/attendance", response_model=List[StaffAttendanceRecord])
async def my_attendance(
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_care_staff),
):
    records = await attendance_service.staff_attendance_history(db, user.id, start_date, end_date)
    return [
        StaffAttendanceRecord(
            date=r.date,
            sign_in_time=r.sign_in_time,
            sign_out_time=r.sign_out_time,
            total_hours=float(r.total_hours) if r.total_hours is not None else None,
        )
        for r in records
    ]


@router.get("/currently-signed-in", response_model=List[SignedInStaff])
async def currently_signed_in(db: AsyncSession = Depends(get_db), user=Depends(require_care_staff)):
    entries = await attendance_service.list_signed_in_staff(db)
    profiles = await get_profiles_by_ids(db, {e.staff_id for e in entries})
    return [
        SignedInStaff(
            staff_id=e.staff_id,
            name=profiles[e.staff_id].full_name if e.staff_id in profiles else "Unknown",
            sign_in_time=e.sign_in_time,
        )
        for e in entries
    ]
