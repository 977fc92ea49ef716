from pydantic import BaseModel, Field
from typing import Literal, Optional

from backoffice.schemas.user import Role

class AppSettingsOut(BaseModel):
    app_name: str
    default_role: Role
    email_notifications: bool
    theme: Literal["dark", "light"]

class AppSettingsUpdateIn(BaseModel):
    app_name: Optional[str] = Field(None, min_length=1, max_length=120)
    default_role: Optional[Role] = None
    email_notifications: Optional[bool] = None
    theme: Optional[Literal["dark", "light"]] = None
