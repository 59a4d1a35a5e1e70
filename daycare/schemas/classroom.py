from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional


class ClassroomBase(BaseModel):
    name: str
    capacity: int = Field(..., gt=0)
    age_group: Optional[str] = None
    description: Optional[str] = None


class ClassroomCreate(ClassroomBase):
    pass


class ClassroomUpdate(BaseModel):
    name: Optional[str] = None
    capacity: Optional[int] = Field(default=None, gt=0)
    age_group: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class ClassroomRead(ClassroomBase):
    id: str
    is_active: bool

    class Config:
        from_attributes = True


class ClassroomOccupancy(ClassroomRead):
    checked_in_count: int
    enrolled_count: int


class RosterChild(BaseModel):
    assignment_id: str
    child_id: str
    name: str
    assigned_at: datetime


class ClassroomDetail(ClassroomRead):
    roster: List[RosterChild]
    checked_in_count: int


class ChildRosterRequest(BaseModel):
    child_id: str


class DashboardClassroom(BaseModel):
    id: str
    name: str
    checked_in_count: int
    capacity: int


class DashboardOverview(BaseModel):
    classrooms: List[DashboardClassroom]
    total_children_checked_in: int
    total_staff_signed_in: int
