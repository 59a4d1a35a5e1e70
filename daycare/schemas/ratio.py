from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

from daycare.models.classroom import AssignmentStatus
from daycare.services.ratio_engine import (
    RatioGroup,
    RatioStatus,
    StatusIndicator,
    format_ratio,
    ratio_label,
    status_color,
)


class StaffAssignmentCreate(BaseModel):
    staff_id: str
    classroom_id: str


class StaffAssignmentRead(BaseModel):
    id: str
    staff_id: str
    classroom_id: str
    status: AssignmentStatus
    assigned_at: datetime
    status_changed_at: datetime

    class Config:
        from_attributes = True


class GroupCountRead(BaseModel):
    group: RatioGroup
    label: str
    count: int
    required_ratio: int


class RatioStatusRead(BaseModel):
    children_count: int
    staff_count: int
    required_ratio: Optional[int] = None
    required_ratio_display: str
    actual_ratio: float
    max_allowed_children: Optional[int] = None
    is_over_ratio: bool
    status_indicator: StatusIndicator
    status_color: str
    dominant_group: Optional[RatioGroup] = None
    unclassified_count: int
    children_by_group: List[GroupCountRead]

    @classmethod
    def from_status(cls, status: RatioStatus) -> "RatioStatusRead":
        indicator = status.status_indicator
        return cls(
            children_count=status.children_count,
            staff_count=status.staff_count,
            required_ratio=status.required_ratio,
            required_ratio_display=format_ratio(status.required_ratio),
            actual_ratio=status.actual_ratio,
            max_allowed_children=status.max_allowed_children,
            is_over_ratio=status.is_over_ratio,
            status_indicator=indicator,
            status_color=status_color(indicator),
            dominant_group=status.dominant_group,
            unclassified_count=status.unclassified_count,
            children_by_group=[
                GroupCountRead(
                    group=g.group,
                    label=ratio_label(g.group, {g.group: g.required_ratio}),
                    count=g.count,
                    required_ratio=g.required_ratio,
                )
                for g in status.children_by_group
            ],
        )


class RatioClassroomInfo(BaseModel):
    id: str
    name: str
    capacity: int
    age_group: Optional[str] = None


class RatioStaffAssignment(BaseModel):
    assignment_id: str
    staff_id: str
    staff_name: str
    is_signed_in: bool
    sign_in_time: Optional[datetime] = None


class RatioChild(BaseModel):
    id: str
    name: str
    age_in_months: Optional[int] = None
    ratio_group: Optional[RatioGroup] = None
    is_kindergarten_enrolled: bool
    check_in_time: datetime


class ClassroomRatioResponse(BaseModel):
    classroom: RatioClassroomInfo
    staff_assignments: List[RatioStaffAssignment]
    current_status: RatioStatusRead
    children: List[RatioChild]


class ClassroomRatioSummary(BaseModel):
    classroom_id: str
    name: str
    capacity: int
    age_group: Optional[str] = None
    staff_count: int
    children_count: int
    required_ratio: Optional[int] = None
    actual_ratio: float
    is_over_ratio: bool
    status_indicator: StatusIndicator
    main_age_group: Optional[RatioGroup] = None


class RatioOverviewSummary(BaseModel):
    total_classrooms: int
    total_staff_signed_in: int
    total_children_checked_in: int
    classrooms_over_ratio: int


class RatioOverviewResponse(BaseModel):
    summary: RatioOverviewSummary
    classrooms: List[ClassroomRatioSummary]


class StaffClassroomAssignmentItem(BaseModel):
    assignment_id: str
    classroom_id: str
    classroom_name: str
    assigned_at: datetime


class StaffAssignmentsResponse(BaseModel):
    staff_id: str
    staff_name: str
    assignments: List[StaffClassroomAssignmentItem]
