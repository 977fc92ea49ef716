# apps/api/backoffice/services/presence_service.py
from __future__ import annotations
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backoffice.core.access import AccessScope
from backoffice.core.errors import ConflictError, NotFoundError, ValidationError
from backoffice.db.models_planning import Presence
from backoffice.schemas.planning import PresenceIn, PresenceUpdateIn
from backoffice.services.employee_service import get_station, resolve_employee
from backoffice.services.planning_service import find_plan_for, validate_year_week
from backoffice.services.week_calendar import DAYS

logger = logging.getLogger(__name__)

DUPLICATE_MSG = "Une présence existe déjà pour cet employé à cette date."


def validate_day(day: Optional[str]) -> str:
    if day not in DAYS:
        raise ValidationError("Jour doit être un jour valide (Lundi à Dimanche).")
    return day


def list_presences(db: Session, scope: AccessScope, year: int, week: int) -> List[Presence]:
    validate_year_week(year, week)
    q = db.query(Presence).filter(Presence.year == year, Presence.week == week)
    station_id = scope.station_filter()
    if station_id is not None:
        q = q.filter(Presence.station_id == station_id)
    return q.order_by(Presence.employee_id, Presence.id).all()


def find_presence(db: Session, employee_id: int, year: int, week: int, day: str) -> Optional[Presence]:
    return (
        db.query(Presence)
        .filter(
            Presence.employee_id == employee_id,
            Presence.year == year,
            Presence.week == week,
            Presence.day == day,
        )
        .first()
    )


def _commit(db: Session, presence: Presence) -> Presence:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_MSG)
    db.refresh(presence)
    return presence


def create_presence(db: Session, scope: AccessScope, body: PresenceIn) -> Presence:
    validate_year_week(body.year, body.week)
    validate_day(body.day)
    resolve_employee(db, employee_id=body.employee_id, not_found="Employé non trouvé.")
    get_station(db, body.station_id)
    scope.ensure_access(body.station_id, "Accès refusé: Vous ne pouvez créer des présences que pour votre station.")

    p = Presence(
        week=body.week,
        day=body.day,
        start_time=body.start_time or "",
        end_time=body.end_time or "",
        year=body.year,
        employee_id=body.employee_id,
        station_id=body.station_id,
        is_present=bool(body.is_present),
    )
    db.add(p)
    return _commit(db, p)


def get_presence(db: Session, scope: AccessScope, presence_id: int) -> Presence:
    p = db.get(Presence, presence_id)
    if p is None:
        raise NotFoundError("Présence non trouvée.")
    scope.ensure_access(p.station_id)
    return p


def update_presence(db: Session, scope: AccessScope, presence_id: int, body: PresenceUpdateIn) -> Presence:
    p = get_presence(db, scope, presence_id)
    data = body.model_dump(exclude_unset=True)

    if data.get("week") is not None or data.get("year") is not None:
        validate_year_week(data.get("year") or p.year, data.get("week") or p.week)
    if "day" in data:
        validate_day(data["day"])
    if data.get("employee_id") is not None:
        resolve_employee(db, employee_id=data["employee_id"], not_found="Employé non trouvé.")
    if data.get("station_id") is not None:
        get_station(db, data["station_id"])
        scope.ensure_access(data["station_id"], "Accès refusé: Vous ne pouvez modifier que les présences de votre station.")

    for k, v in data.items():
        if v is None:
            continue
        setattr(p, k, v)
    return _commit(db, p)


def delete_presence(db: Session, scope: AccessScope, presence_id: int) -> None:
    p = get_presence(db, scope, presence_id)
    db.delete(p)
    db.commit()


def toggle_presence(
    db: Session,
    scope: AccessScope,
    year: int,
    week: int,
    day: str,
    is_present: bool,
    employee_id: Optional[int] = None,
    employee_name: Optional[str] = None,
) -> Presence:
    """
    Marks one employee present/absent for one day of (year, week).

    The employee needs a planning for that week. An existing row only gets its
    is_present flag overwritten (times kept); otherwise a row is created with
    empty times on the caller's station (admins: the employee's station).
    """
    validate_year_week(year, week)
    validate_day(day)
    emp = resolve_employee(db, employee_id=employee_id, employee_name=employee_name)
    if find_plan_for(db, scope, emp, year, week) is None:
        raise NotFoundError("Planning introuvable pour cet employé.")

    existing = find_presence(db, emp.id, year, week, day)
    if existing is not None:
        return _set_flag(db, scope, existing, is_present)

    if scope.can_act_any_station:
        station_id = emp.station_id
        if station_id is None:
            raise ValidationError("Station de l'employé non définie.")
    else:
        station_id = scope.require_station()

    p = Presence(
        week=week,
        day=day,
        start_time="",
        end_time="",
        year=year,
        employee_id=emp.id,
        station_id=station_id,
        is_present=bool(is_present),
    )
    db.add(p)
    try:
        db.commit()
    except IntegrityError:
        # concurrent toggle inserted the same (employee, day, week, year) first
        db.rollback()
        existing = find_presence(db, emp.id, year, week, day)
        if existing is None:
            raise
        return _set_flag(db, scope, existing, is_present)
    db.refresh(p)
    logger.info("[presence] created employee=%s %s %s/%s present=%s", emp.id, day, week, year, p.is_present)
    return p


def _set_flag(db: Session, scope: AccessScope, p: Presence, is_present: bool) -> Presence:
    scope.ensure_access(p.station_id)
    p.is_present = bool(is_present)
    db.commit()
    db.refresh(p)
    logger.info("[presence] updated id=%s present=%s", p.id, p.is_present)
    return p
