import pytest

from backoffice.db.models_planning import Planning, Presence
from backoffice.models.models import Employee, Station
from backoffice.services.reconciliation_service import (
    PLACEHOLDER,
    hours_of,
    merge_week,
    parse_range,
    plan_total_hours,
    sort_entries,
    summary_rows,
    total_hours,
)
from backoffice.services.week_calendar import DAYS


def _station(id_, name):
    return Station(id=id_, name=name)


def _employee(id_, last, first, station=None):
    emp = Employee(id=id_, last_name=last, first_name=first, station_id=station.id if station else None)
    emp.station = station
    return emp


def _presence(id_, emp, station, day, is_present, year=2024, week=10):
    p = Presence(
        id=id_, week=week, day=day, start_time="", end_time="", year=year,
        employee_id=emp.id, station_id=station.id, is_present=is_present,
    )
    p.employee = emp
    p.station = station
    return p


def _snapshot(entries):
    return [
        (
            e.key,
            e.employee_name,
            e.station,
            tuple((d, e.days[d].scheduled, e.days[d].attendance.id if e.days[d].attendance else None) for d in DAYS),
        )
        for e in entries
    ]


@pytest.mark.parametrize("value,expected", [
    ("8h-16h", 8),
    ("16h-8h", 0),
    ("", 0),
    (None, 0),
    ("8h16h", 0),
    ("8h-8h", 0),
    ("6h-22h", 16),
    ("Non défini", 0),
])
def test_hours_of(value, expected):
    assert hours_of(value) == expected


def test_parse_range_rejects_three_digit_hours():
    assert parse_range("100h-120h") is None
    assert parse_range("7h-15h") == (7, 15)


def test_scenario_single_plan_no_attendance():
    centre = _station(1, "Centre")
    jean = _employee(1, "Jean", "Dupont", centre)
    plan = Planning(id=1, employee_name="Jean Dupont", monday="8h-16h", year=2024, week=10, station_id=1)

    entries = merge_week([plan], [], [jean])

    assert len(entries) == 1
    e = entries[0]
    assert e.employee_name == "Jean Dupont"
    assert e.employee_id == 1
    assert e.station == "Centre"
    assert e.days["Lundi"].scheduled == "8h-16h"
    assert e.days["Lundi"].attendance is None
    for d in DAYS[1:]:
        assert e.days[d].scheduled == PLACEHOLDER
        assert e.days[d].attendance is None
    assert total_hours(e) == 8
    assert plan_total_hours(plan) == 8


def test_attendance_without_plan_gets_default_slots():
    centre = _station(1, "Centre")
    ali = _employee(2, "Ben Ali", "Sami", centre)
    p = _presence(10, ali, centre, "Mardi", True)

    entries = merge_week([], [p], [ali])

    assert len(entries) == 1
    e = entries[0]
    assert e.employee_name == "Ben Ali Sami"
    assert e.station == "Centre"
    assert all(e.days[d].scheduled == PLACEHOLDER for d in DAYS)
    assert e.days["Mardi"].attendance is p
    assert total_hours(e) == 0


def test_attendance_station_overrides_roster_station():
    north = _station(1, "Nord")
    south = _station(2, "Sud")
    jean = _employee(1, "Jean", "Dupont", north)
    plan = Planning(id=1, employee_name="Jean Dupont", tuesday="6h-14h", year=2024, week=10)
    p = _presence(5, jean, south, "Mardi", False)

    entries = merge_week([plan], [p], [jean])

    assert len(entries) == 1
    assert entries[0].station == "Sud"
    assert entries[0].days["Mardi"].scheduled == "6h-14h"
    assert entries[0].days["Mardi"].attendance.is_present is False


def test_plan_for_unknown_employee_keeps_name_key():
    plan = Planning(id=1, employee_name="Inconnu Paul", friday="10h-18h", year=2024, week=10)
    entries = merge_week([plan], [], [])
    assert entries[0].key == "name:Inconnu Paul"
    assert entries[0].employee_id is None
    assert entries[0].station is None
    assert total_hours(entries[0]) == 8


def test_employee_without_station_shows_placeholder():
    jean = _employee(1, "Jean", "Dupont")
    plan = Planning(id=1, employee_name="Jean Dupont", year=2024, week=10)
    entries = merge_week([plan], [], [jean])
    assert entries[0].station == PLACEHOLDER


def test_duplicate_display_names_stay_apart_when_plans_carry_ids():
    centre = _station(1, "Centre")
    first = _employee(1, "Martin", "Luc", centre)
    second = _employee(2, "Martin", "Luc", centre)
    plan_a = Planning(id=1, employee_name="Martin Luc", employee_id=1, monday="8h-12h", year=2024, week=10)
    plan_b = Planning(id=2, employee_name="Martin Luc", employee_id=2, monday="14h-20h", year=2024, week=10)

    entries = merge_week([plan_a, plan_b], [], [first, second])

    assert [e.employee_id for e in entries] == [1, 2]
    assert [total_hours(e) for e in entries] == [4, 6]


def test_merge_is_idempotent():
    centre = _station(1, "Centre")
    jean = _employee(1, "Jean", "Dupont", centre)
    sami = _employee(2, "Ben Ali", "Sami", centre)
    plans = [
        Planning(id=1, employee_name="Jean Dupont", monday="8h-16h", sunday="9h-13h", year=2024, week=10),
    ]
    presences = [
        _presence(1, jean, centre, "Lundi", True),
        _presence(2, sami, centre, "Jeudi", False),
    ]

    first = merge_week(plans, presences, [jean, sami])
    second = merge_week(plans, presences, [jean, sami])

    assert _snapshot(first) == _snapshot(second)
    assert len({e.key for e in first}) == len(first) == 2


def test_summary_rows_labels_and_sort():
    centre = _station(1, "Centre")
    jean = _employee(1, "Jean", "Dupont", centre)
    sami = _employee(2, "Ben Ali", "Sami", centre)
    plans = [
        Planning(id=1, employee_name="Jean Dupont", monday="8h-16h", year=2024, week=10),
        Planning(id=2, employee_name="Ben Ali Sami", monday="8h-20h", tuesday="8h-20h", year=2024, week=10),
    ]
    presences = [_presence(1, jean, centre, "Lundi", True), _presence(2, sami, centre, "Lundi", False)]
    entries = merge_week(plans, presences, [jean, sami])

    rows = {r["employee"]: r for r in summary_rows(entries)}
    assert rows["Jean Dupont"]["Lundi"] == "8h-16h"
    assert rows["Jean Dupont"]["Lundi_presence"] == "Présent"
    assert rows["Ben Ali Sami"]["Lundi_presence"] == "Absent"
    assert rows["Ben Ali Sami"]["Mardi_presence"] == PLACEHOLDER
    assert rows["Ben Ali Sami"]["total_hours"] == 24
    assert all(" " not in k for k in rows["Jean Dupont"])

    by_hours = sort_entries(entries, "total_hours", descending=True)
    assert [e.employee_name for e in by_hours] == ["Ben Ali Sami", "Jean Dupont"]
    by_name = sort_entries(entries, "employee_name")
    assert [e.employee_name for e in by_name] == ["Ben Ali Sami", "Jean Dupont"]
