"""
Ratio Service

Reads one snapshot of on-duty staff and checked-in children and feeds it to
the ratio engine. Staff count toward a classroom only when they are both
signed in today and actively assigned to that classroom.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Set
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from daycare.crud import classroom as classroom_crud
from daycare.crud import staff_assignment as assignment_crud
from daycare.crud.user_profile import get_profiles_by_ids
from daycare.models.attendance import ChildCheckIn, StaffAttendance
from daycare.models.child import Child
from daycare.models.classroom import Classroom, StaffClassroomAssignment
from daycare.schemas.ratio import (
    ClassroomRatioResponse,
    ClassroomRatioSummary,
    RatioChild,
    RatioClassroomInfo,
    RatioOverviewResponse,
    RatioOverviewSummary,
    RatioStaffAssignment,
    RatioStatusRead,
)
from daycare.services import attendance_service
from daycare.services.ratio_engine import (
    ChildRatioInput,
    calculate_age_in_months,
    calculate_ratio_status,
)
from daycare.utils.timezones import center_today

log = logging.getLogger(__name__)


def build_child_ratio_inputs(children: Iterable[Child], as_of: date) -> List[ChildRatioInput]:
    return [
        ChildRatioInput(
            child_id=c.id,
            first_name=c.first_name,
            last_name=c.last_name,
            age_in_months=calculate_age_in_months(c.date_of_birth, as_of),
            is_kindergarten_enrolled=bool(c.is_kindergarten_enrolled),
        )
        for c in children
    ]


async def _open_check_ins_with_children(db: AsyncSession, day: date, classroom_id: Optional[str] = None):
    q = (
        select(ChildCheckIn, Child)
        .join(Child, Child.id == ChildCheckIn.child_id)
        .where(ChildCheckIn.date == day, ChildCheckIn.check_out_time.is_(None))
        .order_by(ChildCheckIn.check_in_time)
    )
    if classroom_id:
        q = q.where(ChildCheckIn.classroom_id == classroom_id)
    res = await db.execute(q)
    return res.all()


@dataclass
class ClassroomSnapshot:
    assignments: List[StaffClassroomAssignment]
    signed_in: Dict[str, StaffAttendance]
    check_ins: list  # (ChildCheckIn, Child) rows

    @property
    def on_duty_staff_ids(self) -> Set[str]:
        return {a.staff_id for a in self.assignments if a.staff_id in self.signed_in}


async def classroom_snapshot(db: AsyncSession, classroom_id: str, day: date) -> ClassroomSnapshot:
    """Everything the ratio check needs for one classroom, read in one session."""
    assignments = await assignment_crud.list_active_for_classroom(db, classroom_id)
    signed_in = {a.staff_id: a for a in await attendance_service.list_signed_in_staff(db, day)}
    rows = await _open_check_ins_with_children(db, day, classroom_id)
    return ClassroomSnapshot(assignments=list(assignments), signed_in=signed_in, check_ins=list(rows))


async def classroom_ratio_status(
    db: AsyncSession, classroom: Classroom, day: Optional[date] = None
) -> ClassroomRatioResponse:
    day = day or center_today()

    snap = await classroom_snapshot(db, classroom.id, day)
    assignments, signed_in, rows = snap.assignments, snap.signed_in, snap.check_ins

    staff_count = len(snap.on_duty_staff_ids)
    inputs = build_child_ratio_inputs([child for _, child in rows], day)
    status = calculate_ratio_status(staff_count, inputs)

    if status.is_over_ratio:
        log.warning(
            "classroom over ratio: classroom=%s children=%s staff=%s required=%s",
            classroom.id, status.children_count, staff_count, status.required_ratio,
        )

    profiles = await get_profiles_by_ids(db, {a.staff_id for a in assignments})
    staff_rows = []
    for a in assignments:
        profile = profiles.get(a.staff_id)
        signed = signed_in.get(a.staff_id)
        staff_rows.append(
            RatioStaffAssignment(
                assignment_id=a.id,
                staff_id=a.staff_id,
                staff_name=profile.full_name if profile else "Unknown",
                is_signed_in=signed is not None,
                sign_in_time=signed.sign_in_time if signed else None,
            )
        )

    children = [
        RatioChild(
            id=inp.child_id,
            name=f"{inp.first_name} {inp.last_name}",
            age_in_months=inp.age_in_months,
            ratio_group=inp.ratio_group,
            is_kindergarten_enrolled=inp.is_kindergarten_enrolled,
            check_in_time=check_in.check_in_time,
        )
        for (check_in, _), inp in zip(rows, inputs)
    ]

    return ClassroomRatioResponse(
        classroom=RatioClassroomInfo(
            id=classroom.id,
            name=classroom.name,
            capacity=classroom.capacity,
            age_group=classroom.age_group,
        ),
        staff_assignments=staff_rows,
        current_status=RatioStatusRead.from_status(status),
        children=children,
    )


async def ratio_overview(db: AsyncSession, day: Optional[date] = None) -> RatioOverviewResponse:
    day = day or center_today()

    classrooms = await classroom_crud.list_active_classrooms(db)
    signed_in_ids = {a.staff_id for a in await attendance_service.list_signed_in_staff(db, day)}
    rows = await _open_check_ins_with_children(db, day)

    assigned: Dict[str, set] = defaultdict(set)
    for a in await assignment_crud.list_all_active(db):
        assigned[a.classroom_id].add(a.staff_id)

    children_by_room: Dict[str, List[Child]] = defaultdict(list)
    for check_in, child in rows:
        children_by_room[check_in.classroom_id].append(child)

    summaries = []
    for classroom in classrooms:
        staff_count = len(assigned[classroom.id] & signed_in_ids)
        inputs = build_child_ratio_inputs(children_by_room[classroom.id], day)
        status = calculate_ratio_status(staff_count, inputs)
        summaries.append(
            ClassroomRatioSummary(
                classroom_id=classroom.id,
                name=classroom.name,
                capacity=classroom.capacity,
                age_group=classroom.age_group,
                staff_count=staff_count,
                children_count=status.children_count,
                required_ratio=status.required_ratio,
                actual_ratio=status.actual_ratio,
                is_over_ratio=status.is_over_ratio,
                status_indicator=status.status_indicator,
                main_age_group=status.dominant_group,
            )
        )

    summaries.sort(key=lambda s: s.name.lower())
    over = sum(1 for s in summaries if s.is_over_ratio)
    if over:
        log.warning("ratio overview: %s classroom(s) over ratio", over)

    return RatioOverviewResponse(
        summary=RatioOverviewSummary(
            total_classrooms=len(classrooms),
            total_staff_signed_in=len(signed_in_ids),
            total_children_checked_in=len(rows),
            classrooms_over_ratio=over,
        ),
        classrooms=summaries,
    )
