# apps/api/backoffice/api/routes_attendance.py
from __future__ import annotations
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.core.access import AccessScope
from backoffice.deps import get_db, get_scope
from backoffice.schemas.planning import (
    CalendarOut,
    DaySlotOut,
    EmployeeHoursOut,
    PresenceOut,
    ReconciledEmployeeOut,
    ToggleIn,
    WeekInfoOut,
    WeekViewOut,
)
from backoffice.services.attendance_service import load_week, resolve_week
from backoffice.services.presence_service import toggle_presence
from backoffice.services.reconciliation_service import (
    ReconciledEmployee,
    filter_entries,
    sort_entries,
    summary_rows,
    total_hours,
)
from backoffice.services.week_calendar import (
    current_week,
    format_week_range,
    next_week,
    previous_week,
    week_date_range,
    weeks_in_year,
)

router = APIRouter(prefix="/attendance", tags=["attendance"])


def _entry_out(e: ReconciledEmployee) -> ReconciledEmployeeOut:
    return ReconciledEmployeeOut(
        key=e.key,
        employee_name=e.employee_name,
        employee_id=e.employee_id,
        station=e.station,
        days={
            day: DaySlotOut(
                scheduled=slot.scheduled,
                attendance=PresenceOut.model_validate(slot.attendance, from_attributes=True) if slot.attendance else None,
            )
            for day, slot in e.days.items()
        },
        total_hours=total_hours(e),
    )


def _entries(
    db: Session,
    scope: AccessScope,
    year: int,
    week: int,
    q: Optional[str],
    sort: Optional[str],
    direction: str,
) -> List[ReconciledEmployee]:
    entries = filter_entries(load_week(db, scope, year, week), q)
    if sort:
        entries = sort_entries(entries, sort, descending=(direction == "desc"))
    return entries


@router.get("/week", response_model=WeekViewOut)
def week_view(
    year: Optional[int] = Query(None, description="default: current ISO year"),
    week: Optional[int] = Query(None, description="default: current ISO week"),
    q: Optional[str] = Query(None, description="employee name contains"),
    sort: Optional[Literal["employee_name", "total_hours", "station"]] = Query(None),
    direction: Literal["asc", "desc"] = Query("asc"),
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    """
    Planning x presence grid of one week, one entry per employee.
    Days without a planned range read "Non défini"; attendance is null when
    nothing was recorded for that day.
    """
    y, w = resolve_week(year, week)
    start, end = week_date_range(y, w)
    entries = _entries(db, scope, y, w, q, sort, direction)
    return WeekViewOut(
        year=y,
        week=w,
        start=start,
        end=end,
        label=format_week_range(y, w),
        employees=[_entry_out(e) for e in entries],
    )


@router.get("/week/hours", response_model=List[EmployeeHoursOut])
def week_hours(
    year: Optional[int] = Query(None),
    week: Optional[int] = Query(None),
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    y, w = resolve_week(year, week)
    return [
        EmployeeHoursOut(key=e.key, employee_name=e.employee_name, employee_id=e.employee_id, total_hours=total_hours(e))
        for e in load_week(db, scope, y, w)
    ]


@router.get("/week/summary")
def week_summary(
    year: Optional[int] = Query(None),
    week: Optional[int] = Query(None),
    q: Optional[str] = Query(None),
    sort: Optional[Literal["employee_name", "total_hours", "station"]] = Query(None),
    direction: Literal["asc", "desc"] = Query("asc"),
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    y, w = resolve_week(year, week)
    return {
        "year": y,
        "week": w,
        "label": format_week_range(y, w),
        "rows": summary_rows(_entries(db, scope, y, w, q, sort, direction)),
    }


@router.post("/toggle", response_model=PresenceOut)
def toggle(body: ToggleIn, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    y, w = resolve_week(body.year, body.week)
    return toggle_presence(
        db,
        scope,
        year=y,
        week=w,
        day=body.day,
        is_present=body.is_present,
        employee_id=body.employee_id,
        employee_name=body.employee_name,
    )


@router.get("/calendar", response_model=CalendarOut)
def calendar(year: Optional[int] = Query(None, ge=2000, le=2100), _: AccessScope = Depends(get_scope)):
    cur_year, cur_week = current_week()
    y = year if year is not None else cur_year
    weeks = []
    for w in range(1, weeks_in_year(y) + 1):
        start, end = week_date_range(y, w)
        weeks.append(WeekInfoOut(week=w, start=start, end=end, label=format_week_range(y, w)))
    return CalendarOut(
        year=y,
        weeks_in_year=weeks_in_year(y),
        current_year=cur_year,
        current_week=cur_week,
        weeks=weeks,
    )


@router.get("/calendar/neighbours")
def neighbours(year: int = Query(..., ge=2000, le=2100), week: int = Query(..., ge=1, le=53), _: AccessScope = Depends(get_scope)):
    resolve_week(year, week)
    py, pw = previous_week(year, week)
    ny, nw = next_week(year, week)
    return {"previous": {"year": py, "week": pw}, "next": {"year": ny, "week": nw}}
