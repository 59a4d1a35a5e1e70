from pydantic import BaseModel, Field
from typing import Literal, Optional

Role = Literal["parent", "staff", "director"]


class LoginRequest(BaseModel):
    pin_code: str = Field(..., min_length=4, max_length=12)


class UserProfileBase(BaseModel):
    first_name: str
    last_name: str
    role: Role
    phone: Optional[str] = None


class UserProfileCreate(UserProfileBase):
    pin_code: str = Field(..., min_length=4, max_length=12)


class UserProfileRead(UserProfileBase):
    id: str
    is_active: bool

    class Config:
        from_attributes = True
