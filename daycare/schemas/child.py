from pydantic import BaseModel
from datetime import date
from typing import Optional

from daycare.services.ratio_engine import RatioGroup


class ChildBase(BaseModel):
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    is_kindergarten_enrolled: bool = False
    allergies: Optional[str] = None
    medical_notes: Optional[str] = None


class ChildCreate(ChildBase):
    enrollment_date: Optional[date] = None


class ChildUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    is_kindergarten_enrolled: Optional[bool] = None
    allergies: Optional[str] = None
    medical_notes: Optional[str] = None


class ChildRead(ChildBase):
    id: str
    enrollment_date: Optional[date] = None
    age_in_months: Optional[int] = None
    ratio_group: Optional[RatioGroup] = None

    class Config:
        from_attributes = True


class ChildParentCreate(BaseModel):
    parent_id: str
    relationship: Optional[str] = None
    is_primary: bool = False


class ChildParentRead(BaseModel):
    id: str
    child_id: str
    parent_id: str
    relationship: Optional[str] = None
    is_primary: bool
