from sqlalchemy import Column, String, Boolean, Date, DateTime, Text, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from daycare.models.base import Base
import uuid
from datetime import date


class Child(Base):
    __tablename__ = "children"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String, nullable=False, index=True)
    last_name = Column(String, nullable=False)
    # Nullable: a child with no birth date is left out of ratio-group math
    date_of_birth = Column(Date, nullable=True)
    is_kindergarten_enrolled = Column(Boolean, default=False, nullable=False, index=True)

    allergies = Column(Text, nullable=True)
    medical_notes = Column(Text, nullable=True)
    enrollment_date = Column(Date, default=date.today, nullable=False)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    parent_links = relationship("ChildParent", back_populates="child", cascade="all, delete-orphan")
    check_ins = relationship("ChildCheckIn", back_populates="child", cascade="all, delete-orphan", passive_deletes=True)
    classroom_assignments = relationship("ClassroomAssignment", back_populates="child", cascade="all, delete-orphan", passive_deletes=True)
    daily_reports = relationship("DailyReport", back_populates="child", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class ChildParent(Base):
    __tablename__ = "child_parents"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    child_id = Column(String, ForeignKey("children.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_id = Column(String, ForeignKey("user_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    relationship_label = Column("relationship", String, nullable=True)  # e.g. "Mother", "Guardian"
    is_primary = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    child = relationship("Child", back_populates="parent_links")
    parent = relationship("UserProfile", back_populates="children_links")

    __table_args__ = (
        UniqueConstraint("child_id", "parent_id", name="uq_child_parent"),
    )
