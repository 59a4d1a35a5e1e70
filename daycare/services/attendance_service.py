from datetime import date, datetime
from typing import Optional
import logging

from fastapi import HTTPException
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from daycare.core.constants import HOURS_PRECISION
from daycare.models.attendance import ChildCheckIn, StaffAttendance
from daycare.models.child import Child
from daycare.models.classroom import Classroom
from daycare.utils.timezones import center_today, utcnow

log = logging.getLogger(__name__)


def calculate_hours(start: datetime, end: datetime) -> float:
    hours = (end - start).total_seconds() / 3600
    return round(max(0.0, hours), HOURS_PRECISION)


# -------------------------
# Children
# -------------------------
async def get_open_check_in(db: AsyncSession, child_id: str, day: Optional[date] = None):
    conds = [ChildCheckIn.child_id == child_id, ChildCheckIn.check_out_time.is_(None)]
    if day is not None:
        conds.append(ChildCheckIn.date == day)
    q = select(ChildCheckIn).where(and_(*conds)).order_by(ChildCheckIn.check_in_time.desc())
    res = await db.execute(q)
    return res.scalars().first()


async def check_in_child(
    db: AsyncSession,
    classroom_id: str,
    child_id: str,
    staff_id: str,
    notes: Optional[str] = None,
) -> ChildCheckIn:
    classroom = await db.get(Classroom, classroom_id)
    if not classroom or not classroom.is_active:
        raise HTTPException(status_code=404, detail="Classroom not found")
    child = await db.get(Child, child_id)
    if not child:
        raise HTTPException(status_code=404, detail="Child not found")

    now = utcnow()
    today = center_today()
    # Any open row blocks a new one, including one left open on an earlier day
    existing = await get_open_check_in(db, child_id)
    if existing:
        log.warning("check_in rejected, already open: child=%s entry=%s", child_id, existing.id)
        raise HTTPException(status_code=400, detail="Child is already checked in")

    entry = ChildCheckIn(
        child_id=child_id,
        classroom_id=classroom_id,
        check_in_time=now,
        date=today,
        checked_in_by=staff_id,
        notes=notes,
    )
    db.add(entry)
    await db.commit()
    await db.refresh(entry)

    log.info("check_in: child=%s classroom=%s entry=%s", child_id, classroom_id, entry.id)
    return entry


async def check_out_child(
    db: AsyncSession,
    child_id: str,
    staff_id: str,
    classroom_id: Optional[str] = None,
) -> ChildCheckIn:
    entry = await get_open_check_in(db, child_id)
    if not entry or (classroom_id and entry.classroom_id != classroom_id):
        log.warning("check_out with no open check-in: child=%s classroom=%s", child_id, classroom_id)
        raise HTTPException(status_code=400, detail="Child not checked in")

    now = utcnow()
    entry.check_out_time = now
    entry.total_hours = calculate_hours(entry.check_in_time, now)
    entry.checked_out_by = staff_id
    await db.commit()
    await db.refresh(entry)

    log.info("check_out: child=%s entry=%s hours=%s", child_id, entry.id, entry.total_hours)
    return entry


async def list_checked_in(db: AsyncSession, classroom_id: str, day: Optional[date] = None):
    """(check-in, child) pairs currently present in a classroom"""
    day = day or center_today()
    q = (
        select(ChildCheckIn, Child)
        .join(Child, Child.id == ChildCheckIn.child_id)
        .where(
            ChildCheckIn.classroom_id == classroom_id,
            ChildCheckIn.date == day,
            ChildCheckIn.check_out_time.is_(None),
        )
        .order_by(ChildCheckIn.check_in_time)
    )
    res = await db.execute(q)
    return res.all()


async def child_attendance_history(
    db: AsyncSession,
    child_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
):
    conds = [ChildCheckIn.child_id == child_id]
    if start:
        conds.append(ChildCheckIn.date >= start)
    if end:
        conds.append(ChildCheckIn.date <= end)
    q = select(ChildCheckIn).where(and_(*conds)).order_by(ChildCheckIn.check_in_time.desc())
    res = await db.execute(q)
    return res.scalars().all()


# -------------------------
# Staff
# -------------------------
async def get_open_sign_in(db: AsyncSession, staff_id: str, day: Optional[date] = None):
    q = select(StaffAttendance).where(
        and_(
            StaffAttendance.staff_id == staff_id,
            StaffAttendance.date == (day or center_today()),
            StaffAttendance.sign_out_time.is_(None),
        )
    )
    res = await db.execute(q)
    return res.scalars().first()


async def sign_in_staff(db: AsyncSession, staff_id: str, notes: Optional[str] = None) -> StaffAttendance:
    # Idempotent: if already signed in today, just return it
    open_entry = await get_open_sign_in(db, staff_id)
    if open_entry:
        log.info("sign_in idempotent hit: staff=%s entry=%s", staff_id, open_entry.id)
        return open_entry

    entry = StaffAttendance(
        staff_id=staff_id,
        sign_in_time=utcnow(),
        date=center_today(),
        notes=notes,
    )
    db.add(entry)
    await db.commit()
    await db.refresh(entry)

    log.info("sign_in: staff=%s entry=%s", staff_id, entry.id)
    return entry


async def sign_out_staff(db: AsyncSession, staff_id: str) -> StaffAttendance:
    entry = await get_open_sign_in(db, staff_id)
    if not entry:
        log.warning("sign_out with no open sign-in: staff=%s", staff_id)
        raise HTTPException(status_code=400, detail="Staff not signed in today")

    now = utcnow()
    entry.sign_out_time = now
    entry.total_hours = calculate_hours(entry.sign_in_time, now)
    await db.commit()
    await db.refresh(entry)

    log.info("sign_out: staff=%s entry=%s hours=%s", staff_id, entry.id, entry.total_hours)
    return entry


async def staff_attendance_history(
    db: AsyncSession,
    staff_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
):
    conds = [StaffAttendance.staff_id == staff_id]
    if start:
        conds.append(StaffAttendance.date >= start)
    if end:
        conds.append(StaffAttendance.date <= end)
    q = select(StaffAttendance).where(and_(*conds)).order_by(StaffAttendance.sign_in_time.desc())
    res = await db.execute(q)
    return res.scalars().all()


async def list_signed_in_staff(db: AsyncSession, day: Optional[date] = None):
    q = select(StaffAttendance).where(
        StaffAttendance.date == (day or center_today()),
        StaffAttendance.sign_out_time.is_(None),
    ).order_by(StaffAttendance.sign_in_time)
    res = await db.execute(q)
    return res.scalars().all()
