from pydantic import BaseModel
import datetime as dt
from typing import Optional


class CheckInRequest(BaseModel):
    child_id: str
    notes: Optional[str] = None


class CheckOutRequest(BaseModel):
    child_id: str


class SignInRequest(BaseModel):
    notes: Optional[str] = None


class AttendanceResult(BaseModel):
    id: str
    total_hours: Optional[float] = None


class CheckedInChild(BaseModel):
    child_id: str
    name: str
    check_in_time: dt.datetime


class ChildAttendanceRecord(BaseModel):
    date: dt.date
    classroom_id: str
    check_in_time: dt.datetime
    check_out_time: Optional[dt.datetime] = None
    total_hours: Optional[float] = None


class StaffAttendanceRecord(BaseModel):
    date: dt.date
    sign_in_time: dt.datetime
    sign_out_time: Optional[dt.datetime] = None
    total_hours: Optional[float] = None


class SignedInStaff(BaseModel):
    staff_id: str
    name: str
    sign_in_time: dt.datetime
