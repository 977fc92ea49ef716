# apps/api/backoffice/core/access.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from backoffice.core.errors import ForbiddenError, ValidationError

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class AccessScope:
    """
    What the caller may touch, computed once per request from the token.
    admin: any station. manager / mainManager: only scope_station_id.
    """
    user_id: int
    role: str
    can_act_any_station: bool
    scope_station_id: Optional[int] = None

    @classmethod
    def from_claims(cls, user_id: int, role: str, station_id: Optional[int]) -> "AccessScope":
        is_admin = (role or "").lower() == ADMIN_ROLE
        return cls(
            user_id=user_id,
            role=role,
            can_act_any_station=is_admin,
            scope_station_id=station_id,
        )

    def require_station(self) -> int:
        if self.scope_station_id is None:
            raise ValidationError("Station de l'utilisateur non définie.")
        return self.scope_station_id

    def station_filter(self) -> Optional[int]:
        """None = no filter (admin); otherwise the station every query is pinned to."""
        if self.can_act_any_station:
            return None
        return self.require_station()

    def can_access(self, station_id: Optional[int]) -> bool:
        if self.can_act_any_station:
            return True
        return self.scope_station_id is not None and station_id == self.scope_station_id

    def ensure_access(self, station_id: Optional[int], message: str = "Accès refusé: Station non autorisée.") -> None:
        if not self.can_access(station_id):
            raise ForbiddenError(message)
