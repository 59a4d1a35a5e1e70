from pydantic import BaseModel
import datetime as dt
from typing import Any, Dict, List, Literal, Optional

Mood = Literal["happy", "good", "neutral", "fussy", "upset"]


class DailyReportCreate(BaseModel):
    child_id: str
    date: Optional[dt.date] = None
    meals: Optional[List[Dict[str, Any]]] = None
    nap: Optional[Dict[str, Any]] = None
    activities: Optional[str] = None
    mood: Optional[Mood] = None
    notes: Optional[str] = None


class DailyReportRead(BaseModel):
    id: str
    child_id: str
    staff_id: str
    date: dt.date
    meals: Optional[List[Dict[str, Any]]] = None
    nap: Optional[Dict[str, Any]] = None
    activities: Optional[str] = None
    mood: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class DailyReportUpdate(BaseModel):
    meals: Optional[List[Dict[str, Any]]] = None
    nap: Optional[Dict[str, Any]] = None
    activities: Optional[str] = None
    mood: Optional[Mood] = None
    notes: Optional[str] = None
