from pydantic import BaseModel, EmailStr, Field

from backoffice.schemas.user import Role, UserOut

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class RegisterIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=1)
    # validated in the route so the message can list the valid roles
    role: str
    station_id: int | None = None

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut

class ProfileUpdateIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr

__all__ = ["LoginIn", "RegisterIn", "TokenOut", "ProfileUpdateIn", "Role", "UserOut"]
