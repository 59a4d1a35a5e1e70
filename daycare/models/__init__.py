from .base import Base
from .user_profile import UserProfile
from .child import Child, ChildParent
from .classroom import AssignmentStatus, Classroom, ClassroomAssignment, StaffClassroomAssignment
from .attendance import ChildCheckIn, StaffAttendance
from .daily_report import DailyReport
