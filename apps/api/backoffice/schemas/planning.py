# apps/api/backoffice/schemas/planning.py
from __future__ import annotations
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------- Plannings ----------
class PlanningIn(BaseModel):
    # one of the two is required; employee_id is preferred
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    monday: Optional[str] = None
    tuesday: Optional[str] = None
    wednesday: Optional[str] = None
    thursday: Optional[str] = None
    friday: Optional[str] = None
    saturday: Optional[str] = None
    sunday: Optional[str] = None
    year: int
    week: int
    station_id: Optional[int] = None   # admin only; others use their token station


class PlanningOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    employee_name: str
    employee_id: Optional[int] = None
    monday: Optional[str] = None
    tuesday: Optional[str] = None
    wednesday: Optional[str] = None
    thursday: Optional[str] = None
    friday: Optional[str] = None
    saturday: Optional[str] = None
    sunday: Optional[str] = None
    year: int
    week: int
    station_id: Optional[int] = None
    station_name: Optional[str] = None
    total_hours: int = 0


# ---------- Presences ----------
class PresenceIn(BaseModel):
    week: int
    day: str
    start_time: str = ""
    end_time: str = ""
    year: int
    employee_id: int
    station_id: int
    is_present: bool = False


class PresenceUpdateIn(BaseModel):
    week: Optional[int] = None
    day: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    year: Optional[int] = None
    employee_id: Optional[int] = None
    station_id: Optional[int] = None
    is_present: Optional[bool] = None


class PresenceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    week: int
    day: str
    start_time: str = ""
    end_time: str = ""
    year: int
    employee_id: int
    employee_name: Optional[str] = None
    station_id: int
    station_name: Optional[str] = None
    is_present: bool


# ---------- Reconciled week ----------
class DaySlotOut(BaseModel):
    scheduled: str
    attendance: Optional[PresenceOut] = None


class ReconciledEmployeeOut(BaseModel):
    key: str
    employee_name: str
    employee_id: Optional[int] = None
    station: Optional[str] = None
    days: Dict[str, DaySlotOut]
    total_hours: int


class WeekViewOut(BaseModel):
    year: int
    week: int
    start: date
    end: date
    label: str
    employees: List[ReconciledEmployeeOut]


class EmployeeHoursOut(BaseModel):
    key: str
    employee_name: str
    employee_id: Optional[int] = None
    total_hours: int


class ToggleIn(BaseModel):
    # default: current week in settings.TZ
    year: Optional[int] = None
    week: Optional[int] = Field(None, ge=1, le=53)
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    day: str
    is_present: bool


class WeekInfoOut(BaseModel):
    week: int
    start: date
    end: date
    label: str


class CalendarOut(BaseModel):
    year: int
    weeks_in_year: int
    current_year: int
    current_week: int
    weeks: List[WeekInfoOut]
