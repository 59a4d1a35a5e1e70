from sqlalchemy import (
    Column, String, Boolean, Integer, DateTime, Text, ForeignKey,
    Enum, Index, CheckConstraint, func
)
from sqlalchemy.orm import relationship
import enum
import uuid
from daycare.models.base import Base
from daycare.utils.timezones import utcnow


class AssignmentStatus(str, enum.Enum):
    ACTIVE = "active"     # currently assigned
    REMOVED = "removed"   # taken off the classroom; kept for history


class Classroom(Base):
    __tablename__ = "classrooms"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    capacity = Column(Integer, nullable=False)
    age_group = Column(String, nullable=True)  # display label, e.g. "Toddlers"
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    child_assignments = relationship("ClassroomAssignment", back_populates="classroom", cascade="all, delete-orphan", passive_deletes=True)
    staff_assignments = relationship("StaffClassroomAssignment", back_populates="classroom", cascade="all, delete-orphan", passive_deletes=True)
    check_ins = relationship("ChildCheckIn", back_populates="classroom", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_classrooms_capacity_positive"),
    )


class ClassroomAssignment(Base):
    """Child roster membership for a classroom."""
    __tablename__ = "classroom_assignments"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    child_id = Column(String, ForeignKey("children.id", ondelete="CASCADE"), nullable=False, index=True)
    classroom_id = Column(String, ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(
        Enum(AssignmentStatus, name="assignment_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AssignmentStatus.ACTIVE,
    )
    assigned_at = Column(DateTime, default=utcnow, nullable=False)
    status_changed_at = Column(DateTime, default=utcnow, nullable=False)

    child = relationship("Child", back_populates="classroom_assignments")
    classroom = relationship("Classroom", back_populates="child_assignments")


class StaffClassroomAssignment(Base):
    __tablename__ = "staff_classroom_assignments"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    staff_id = Column(String, ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    classroom_id = Column(String, ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(
        Enum(AssignmentStatus, name="assignment_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AssignmentStatus.ACTIVE,
    )
    assigned_at = Column(DateTime, default=utcnow, nullable=False)
    status_changed_at = Column(DateTime, default=utcnow, nullable=False)

    staff = relationship("UserProfile", back_populates="staff_assignments")
    classroom = relationship("Classroom", back_populates="staff_assignments")


Index("ix_classroom_assignments_status", ClassroomAssignment.classroom_id, ClassroomAssignment.status)
Index("ix_staff_classroom_assignments_status", StaffClassroomAssignment.classroom_id, StaffClassroomAssignment.status)
