# apps/api/backoffice/services/reconciliation_service.py
"""
Weekly planning / attendance reconciliation.

Everything here is pure: callers fetch plannings, presences and the employee
roster for one (year, week) and get back one entry per employee with, for
each day, the planned range and the attendance row (if any).

Entries are keyed by employee id when it can be resolved (planning.employee_id,
or the first roster employee whose display name equals planning.employee_name).
Plannings whose name matches nobody keep a name key; two different employees
sharing a display name can only be told apart through employee_id.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Optional, Tuple

from backoffice.db.models_planning import Planning, Presence
from backoffice.models.models import Employee
from backoffice.services.week_calendar import DAYS, DAY_FIELDS

PLACEHOLDER = "Non défini"
PRESENT_LABEL = "Présent"
ABSENT_LABEL = "Absent"

_RANGE_RE = re.compile(r"(\d{1,2})h-(\d{1,2})h")


@dataclass
class DaySlot:
    scheduled: str = PLACEHOLDER
    attendance: Optional[Presence] = None


@dataclass
class ReconciledEmployee:
    key: str
    employee_name: str
    employee_id: Optional[int] = None
    station: Optional[str] = None
    days: Dict[str, DaySlot] = field(default_factory=lambda: {d: DaySlot() for d in DAYS})

    @property
    def total_hours(self) -> int:
        return total_hours(self)


# ---------------- Hours ----------------

def parse_range(value: Optional[str]) -> Optional[Tuple[int, int]]:
    if not value:
        return None
    m = _RANGE_RE.fullmatch(value)
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


def hours_of(value: Optional[str]) -> int:
    # missing, malformed or end <= start -> 0, never an error
    rng = parse_range(value)
    if rng is None:
        return 0
    start, end = rng
    return end - start if end > start else 0


def total_hours(entry: ReconciledEmployee) -> int:
    return sum(hours_of(entry.days[d].scheduled) for d in DAYS)


def plan_total_hours(plan: Planning) -> int:
    return sum(hours_of(getattr(plan, DAY_FIELDS[d])) for d in DAYS)


# ---------------- Merge ----------------

def _id_key(employee_id: int) -> str:
    return f"id:{employee_id}"


def _name_key(name: str) -> str:
    return f"name:{name}"


def _index_roster(roster: Iterable[Employee]) -> Tuple[Dict[int, Employee], Dict[str, Employee]]:
    by_id: Dict[int, Employee] = {}
    by_name: Dict[str, Employee] = {}
    for emp in roster:
        by_id[emp.id] = emp
        # first match wins on duplicate display names
        by_name.setdefault(emp.display_name, emp)
    return by_id, by_name


def _station_label(emp: Optional[Employee]) -> Optional[str]:
    if emp is None:
        return None
    return emp.station.name if emp.station is not None else PLACEHOLDER


def merge_week(
    plans: Iterable[Planning],
    presences: Iterable[Presence],
    roster: Iterable[Employee],
) -> List[ReconciledEmployee]:
    by_id, by_name = _index_roster(roster)
    entries: Dict[str, ReconciledEmployee] = {}

    for plan in plans:
        emp = plan.employee
        if emp is None and plan.employee_id is not None:
            emp = by_id.get(plan.employee_id)
        if emp is None:
            emp = by_name.get(plan.employee_name)

        key = _id_key(emp.id) if emp is not None else _name_key(plan.employee_name)
        entry = entries.get(key)
        if entry is None:
            entry = ReconciledEmployee(
                key=key,
                employee_name=plan.employee_name,
                employee_id=emp.id if emp is not None else None,
            )
            entries[key] = entry
        for d in DAYS:
            entry.days[d].scheduled = getattr(plan, DAY_FIELDS[d]) or PLACEHOLDER
        if emp is not None:
            entry.station = _station_label(emp)

    for presence in presences:
        emp = presence.employee if presence.employee is not None else by_id.get(presence.employee_id)
        if emp is None:
            continue
        name = emp.display_name
        entry = entries.get(_id_key(emp.id)) or entries.get(_name_key(name))
        if entry is None:
            entry = ReconciledEmployee(key=_id_key(emp.id), employee_name=name, employee_id=emp.id)
            entries[entry.key] = entry
        if presence.day not in entry.days:
            continue
        entry.days[presence.day].attendance = presence
        # the presence row references its station directly, it beats the roster lookup
        if presence.station is not None and presence.station.name:
            entry.station = presence.station.name

    return list(entries.values())


# ---------------- Listing helpers ----------------

SortKey = Literal["employee_name", "total_hours", "station"]


def filter_entries(entries: List[ReconciledEmployee], q: Optional[str]) -> List[ReconciledEmployee]:
    if not q:
        return entries
    term = q.strip().lower()
    return [e for e in entries if term in e.employee_name.lower()]


def sort_entries(entries: List[ReconciledEmployee], key: SortKey, descending: bool = False) -> List[ReconciledEmployee]:
    if key == "total_hours":
        return sorted(entries, key=total_hours, reverse=descending)
    if key == "station":
        return sorted(entries, key=lambda e: (e.station or "").lower(), reverse=descending)
    return sorted(entries, key=lambda e: e.employee_name.lower(), reverse=descending)


def attendance_label(presence: Optional[Presence]) -> str:
    if presence is None:
        return PLACEHOLDER
    return PRESENT_LABEL if presence.is_present else ABSENT_LABEL


def summary_rows(entries: Iterable[ReconciledEmployee]) -> List[dict]:
    """Flat rows (one per employee) for spreadsheet-style consumers."""
    rows = []
    for e in entries:
        row = {"employee": e.employee_name, "station": e.station or PLACEHOLDER}
        for d in DAYS:
            slot = e.days[d]
            row[d] = slot.scheduled or PLACEHOLDER
            row[f"{d}_presence"] = attendance_label(slot.attendance)
        row["total_hours"] = total_hours(e)
        rows.append(row)
    return rows
