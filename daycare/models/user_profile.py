from sqlalchemy import Column, String, Boolean, DateTime, Index, func
from sqlalchemy.orm import relationship
from daycare.models.base import Base
import uuid


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    role = Column(String, nullable=False)  # "parent", "staff", "director"
    pin_code = Column(String, nullable=False, unique=True)
    phone = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    children_links = relationship("ChildParent", back_populates="parent", cascade="all, delete-orphan")
    staff_assignments = relationship("StaffClassroomAssignment", back_populates="staff")
    attendance = relationship("StaffAttendance", back_populates="staff")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    __table_args__ = (
        Index("ix_user_profiles_role", "role"),
    )
