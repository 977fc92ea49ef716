# apps/api/backoffice/services/week_calendar.py
from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from pytz import timezone

from backoffice.core.config import settings

# Monday first, names as stored in presences.day
DAYS: Tuple[str, ...] = ("Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche")

# presences.day -> plannings column
DAY_FIELDS = {
    "Lundi": "monday",
    "Mardi": "tuesday",
    "Mercredi": "wednesday",
    "Jeudi": "thursday",
    "Vendredi": "friday",
    "Samedi": "saturday",
    "Dimanche": "sunday",
}


def _thursday_of(d: date) -> date:
    # ISO weeks are anchored on their Thursday
    return d + timedelta(days=3 - d.weekday())


def week_number_of(d: date) -> int:
    thursday = _thursday_of(d)
    day_of_year = (thursday - date(thursday.year, 1, 1)).days + 1
    return (day_of_year + 6) // 7


def iso_year_of(d: date) -> int:
    """Year owning d's ISO week (Dec 30 2024 -> 2025, Jan 1 2021 -> 2020)."""
    return _thursday_of(d).year


def weeks_in_year(year: int) -> int:
    # Dec 28 always sits in the last ISO week; Dec 31 may already be week 1.
    return week_number_of(date(year, 12, 28))


def _first_thursday(year: int) -> date:
    jan1 = date(year, 1, 1)
    return jan1 + timedelta(days=(3 - jan1.weekday()) % 7)


def week_date_range(year: int, week: int) -> Tuple[date, date]:
    """Monday..Sunday of ISO (year, week); may spill into the neighbouring years."""
    monday = _first_thursday(year) - timedelta(days=3) + timedelta(weeks=week - 1)
    return monday, monday + timedelta(days=6)


def week_dates(year: int, week: int) -> List[date]:
    monday, _ = week_date_range(year, week)
    return [monday + timedelta(days=i) for i in range(7)]


def format_week_range(year: int, week: int) -> str:
    start, end = week_date_range(year, week)
    return f"{start.strftime('%d/%m/%Y')} - {end.strftime('%d/%m/%Y')}"


def today_local(tz: Optional[str] = None) -> date:
    return datetime.now(timezone(tz or settings.TZ)).date()


def current_week(tz: Optional[str] = None) -> Tuple[int, int]:
    d = today_local(tz)
    return iso_year_of(d), week_number_of(d)


def previous_week(year: int, week: int) -> Tuple[int, int]:
    if week <= 1:
        return year - 1, weeks_in_year(year - 1)
    return year, week - 1


def next_week(year: int, week: int) -> Tuple[int, int]:
    if week >= weeks_in_year(year):
        return year + 1, 1
    return year, week + 1
