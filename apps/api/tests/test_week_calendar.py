from datetime import date, timedelta

import pytest

from backoffice.services.week_calendar import (
    DAYS,
    DAY_FIELDS,
    format_week_range,
    iso_year_of,
    next_week,
    previous_week,
    week_date_range,
    week_dates,
    week_number_of,
    weeks_in_year,
)


@pytest.mark.parametrize("year,expected", [(2015, 53), (2020, 53), (2024, 52), (2025, 52), (2026, 53)])
def test_weeks_in_year_known_years(year, expected):
    assert weeks_in_year(year) == expected


def test_last_week_of_every_year_ends_late_december_or_after():
    for year in range(2000, 2101):
        n = weeks_in_year(year)
        assert n in (52, 53)
        _, end = week_date_range(year, n)
        assert end >= date(year, 12, 25)


def test_week_number_matches_iso_calendar():
    d = date(2018, 12, 1)
    while d < date(2027, 2, 1):
        iso = d.isocalendar()
        assert week_number_of(d) == iso[1], d
        assert iso_year_of(d) == iso[0], d
        d += timedelta(days=1)


def test_week_range_contains_date():
    d = date(2019, 12, 20)
    while d < date(2021, 1, 15):
        start, end = week_date_range(iso_year_of(d), week_number_of(d))
        assert start <= d <= end
        assert start.weekday() == 0 and end.weekday() == 6
        d += timedelta(days=1)


def test_year_boundary_weeks_resolve_to_real_dates():
    # week 1 of 2025 starts in December 2024
    assert week_date_range(2025, 1) == (date(2024, 12, 30), date(2025, 1, 5))
    # week 53 of 2020 ends in January 2021
    assert week_date_range(2020, 53) == (date(2020, 12, 28), date(2021, 1, 3))
    assert week_number_of(date(2024, 12, 31)) == 1
    assert week_number_of(date(2021, 1, 1)) == 53


def test_format_and_dates():
    assert format_week_range(2024, 10) == "04/03/2024 - 10/03/2024"
    days = week_dates(2024, 10)
    assert len(days) == 7
    assert days[0] == date(2024, 3, 4)
    assert days[-1] == date(2024, 3, 10)


def test_navigation_wraps_years():
    assert previous_week(2021, 1) == (2020, 53)
    assert next_week(2020, 53) == (2021, 1)
    assert next_week(2024, 52) == (2025, 1)
    assert previous_week(2024, 10) == (2024, 9)


def test_day_names_map_to_planning_columns():
    assert DAYS[0] == "Lundi" and DAYS[-1] == "Dimanche"
    assert [DAY_FIELDS[d] for d in DAYS] == [
        "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
    ]
