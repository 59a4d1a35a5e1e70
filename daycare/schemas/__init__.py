from .user_profile import LoginRequest, UserProfileCreate, UserProfileRead
from .child import ChildCreate, ChildUpdate, ChildRead, ChildParentCreate, ChildParentRead
from .classroom import (
    ClassroomCreate,
    ClassroomUpdate,
    ClassroomRead,
    ClassroomOccupancy,
    ClassroomDetail,
    ChildRosterRequest,
    RosterChild,
)
from .attendance import (
    CheckInRequest,
    CheckOutRequest,
    SignInRequest,
    AttendanceResult,
    CheckedInChild,
    ChildAttendanceRecord,
    StaffAttendanceRecord,
    SignedInStaff,
)
from .daily_report import DailyReportCreate, DailyReportRead, DailyReportUpdate
from .ratio import (
    StaffAssignmentCreate,
    StaffAssignmentRead,
    RatioStatusRead,
    ClassroomRatioResponse,
    RatioOverviewResponse,
    StaffAssignmentsResponse,
)
