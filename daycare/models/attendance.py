from sqlalchemy import (
    Column, String, Date, DateTime, Numeric, Text, ForeignKey,
    Index, CheckConstraint, func
)
from sqlalchemy.orm import relationship
import uuid
from daycare.models.base import Base


class ChildCheckIn(Base):
    __tablename__ = "child_check_ins"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    child_id = Column(String, ForeignKey("children.id", ondelete="CASCADE"), nullable=False, index=True)
    classroom_id = Column(String, ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False, index=True)

    # Always store UTC datetimes; `date` is the center-local calendar day
    check_in_time = Column(DateTime(timezone=False), nullable=False)
    check_out_time = Column(DateTime(timezone=False), nullable=True)  # NULL = still in the room
    total_hours = Column(Numeric(5, 2), nullable=True)
    date = Column(Date, nullable=False, index=True)

    checked_in_by = Column(String, ForeignKey("user_profiles.id"), nullable=False)
    checked_out_by = Column(String, ForeignKey("user_profiles.id"), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    child = relationship("Child", back_populates="check_ins")
    classroom = relationship("Classroom", back_populates="check_ins")

    __table_args__ = (
        CheckConstraint(
            "total_hours IS NULL OR total_hours >= 0",
            name="ck_child_check_ins_hours_nonneg",
        ),
    )


class StaffAttendance(Base):
    __tablename__ = "staff_attendance"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    staff_id = Column(String, ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    sign_in_time = Column(DateTime(timezone=False), nullable=False)
    sign_out_time = Column(DateTime(timezone=False), nullable=True)  # NULL = on duty
    total_hours = Column(Numeric(5, 2), nullable=True)
    date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    staff = relationship("UserProfile", back_populates="attendance")

    __table_args__ = (
        CheckConstraint(
            "total_hours IS NULL OR total_hours >= 0",
            name="ck_staff_attendance_hours_nonneg",
        ),
    )


Index("ix_child_check_ins_open", ChildCheckIn.classroom_id, ChildCheckIn.date, ChildCheckIn.check_out_time)
Index("ix_staff_attendance_open", StaffAttendance.date, StaffAttendance.sign_out_time)
