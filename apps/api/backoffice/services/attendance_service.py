# apps/api/backoffice/services/attendance_service.py
from __future__ import annotations
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from backoffice.core.access import AccessScope
from backoffice.services.employee_service import list_roster
from backoffice.services.planning_service import list_plannings, validate_year_week
from backoffice.services.presence_service import list_presences
from backoffice.services.reconciliation_service import ReconciledEmployee, merge_week
from backoffice.services.week_calendar import current_week


def resolve_week(year: Optional[int], week: Optional[int]) -> Tuple[int, int]:
    """Missing year/week -> current ISO week in settings.TZ."""
    cur_year, cur_week = current_week()
    y = year if year is not None else cur_year
    w = week if week is not None else cur_week
    validate_year_week(y, w)
    return y, w


def load_week(db: Session, scope: AccessScope, year: int, week: int) -> List[ReconciledEmployee]:
    """
    Fetch the (scoped) plannings and presences of one week and merge them.
    No data simply yields an empty list.
    """
    plans = list_plannings(db, scope, year, week)
    presences = list_presences(db, scope, year, week)
    # name resolution needs the whole roster: a planning may name someone
    # currently attached to another station
    roster = list_roster(db)
    return merge_week(plans, presences, roster)
