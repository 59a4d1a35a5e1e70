from . import child, classroom, daily_report, staff_assignment, user_profile
