from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Literal

Role = Literal["manager", "mainManager", "admin"]

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    email: EmailStr
    role: Role
    station_id: int | None = None
    is_active: bool = True

class UserUpdateIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    role: Role
    station_id: int | None = None
