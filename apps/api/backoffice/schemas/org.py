# apps/api/backoffice/schemas/org.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import date
from typing import Literal

Position = Literal["manager", "cashier", "attendant", "maintenance"]

class StationIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    address: str | None = None
    city: str | None = None
    phone: str | None = None
    email: EmailStr | None = None
    capacity: int = Field(0, ge=0)
    pump_count: int = Field(0, ge=0)

class StationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    address: str | None
    city: str | None
    phone: str | None
    email: str | None
    capacity: int
    pump_count: int

class EmployeeIn(BaseModel):
    last_name: str = Field(..., min_length=1, max_length=120)
    first_name: str = Field(..., min_length=1, max_length=120)
    address: str | None = None
    phone: str | None = None
    email: EmailStr | None = None
    position: Position = "attendant"
    start_date: date | None = None
    station_id: int | None = None

class EmployeeUpdateIn(BaseModel):
    last_name: str | None = Field(None, min_length=1, max_length=120)
    first_name: str | None = Field(None, min_length=1, max_length=120)
    address: str | None = None
    phone: str | None = None
    email: EmailStr | None = None
    position: Position | None = None
    start_date: date | None = None
    station_id: int | None = None

class EmployeeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    last_name: str
    first_name: str
    display_name: str
    address: str | None
    phone: str | None
    email: str | None
    position: str
    start_date: date | None
    station_id: int | None
    image: str = ""
