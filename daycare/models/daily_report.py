from sqlalchemy import Column, String, Date, DateTime, Text, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
import uuid
from daycare.models.base import Base


class DailyReport(Base):
    __tablename__ = "daily_reports"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    child_id = Column(String, ForeignKey("children.id", ondelete="CASCADE"), nullable=False, index=True)
    staff_id = Column(String, ForeignKey("user_profiles.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    meals = Column(JSON, nullable=True)       # [{"meal": "Lunch", "amount": "most"}]
    nap = Column(JSON, nullable=True)         # {"start": "...", "end": "...", "quality": "good"}
    activities = Column(Text, nullable=True)
    mood = Column(String, nullable=True)      # happy / good / neutral / fussy / upset
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    child = relationship("Child", back_populates="daily_reports")
    staff = relationship("UserProfile")
