# apps/api/backoffice/services/planning_service.py
from __future__ import annotations
import logging
import re
from typing import List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backoffice.core.access import AccessScope
from backoffice.core.errors import ConflictError, NotFoundError, ValidationError
from backoffice.db.models_planning import Planning
from backoffice.models.models import Employee
from backoffice.schemas.planning import PlanningIn
from backoffice.services.employee_service import find_by_display_name, get_station, resolve_employee
from backoffice.services.week_calendar import DAYS, DAY_FIELDS, weeks_in_year

logger = logging.getLogger(__name__)

_SLOT_RE = re.compile(r"\d{1,2}h-\d{1,2}h")
SLOT_FIELDS = tuple(DAY_FIELDS[d] for d in DAYS)


def validate_year_week(year: Optional[int], week: Optional[int]) -> None:
    if year is None or week is None:
        raise ValidationError("Année et semaine sont requises.")
    if year < 2000 or year > 2100:
        raise ValidationError("Année doit être entre 2000 et 2100.")
    if week < 1 or week > 53:
        raise ValidationError("Semaine doit être entre 1 et 53.")
    # week 53 of a 52-week year is week 1 of the next one
    if week > weeks_in_year(year):
        raise ValidationError(f"L'année {year} ne compte que {weeks_in_year(year)} semaines.")


def normalize_slot(field: str, value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    if not value:
        return None
    if not _SLOT_RE.fullmatch(value):
        raise ValidationError(f'Format invalide pour {field.capitalize()}. Utilisez "8h-16h".')
    return value


def list_plannings(db: Session, scope: AccessScope, year: int, week: int) -> List[Planning]:
    validate_year_week(year, week)
    q = db.query(Planning).filter(Planning.year == year, Planning.week == week)
    station_id = scope.station_filter()
    if station_id is not None:
        q = q.filter(Planning.station_id == station_id)
    return q.order_by(Planning.employee_name, Planning.id).all()


def find_plan_for(db: Session, scope: AccessScope, employee: Employee, year: int, week: int) -> Optional[Planning]:
    """Planning of employee for (year, week): by id, or by display name for legacy rows."""
    q = db.query(Planning).filter(
        Planning.year == year,
        Planning.week == week,
        or_(
            Planning.employee_id == employee.id,
            # a name only counts on rows that are not linked to anyone
            and_(Planning.employee_id.is_(None), Planning.employee_name == employee.display_name),
        ),
    )
    station_id = scope.station_filter()
    if station_id is not None:
        q = q.filter(Planning.station_id == station_id)
    return q.order_by(Planning.id).first()


def _target_station(db: Session, scope: AccessScope, station_id: Optional[int]) -> int:
    if not scope.can_act_any_station:
        return scope.require_station()
    if station_id is None:
        raise ValidationError("Station requise pour les administrateurs.")
    return get_station(db, station_id, "Station spécifiée non trouvée.").id


def _apply(db: Session, scope: AccessScope, plan: Planning, body: PlanningIn) -> None:
    validate_year_week(body.year, body.week)
    slots = {f: normalize_slot(f, getattr(body, f)) for f in SLOT_FIELDS}
    station_id = _target_station(db, scope, body.station_id)

    if body.employee_id is not None:
        emp = resolve_employee(db, employee_id=body.employee_id, not_found="Employé non trouvé.")
    else:
        name = (body.employee_name or "").strip()
        if not name:
            raise ValidationError("L'employé est requis.")
        # legacy clients send only the name; link it when it resolves
        emp = find_by_display_name(db, name)
        if emp is None:
            plan.employee_id = None
            plan.employee_name = name

    if emp is not None:
        plan.employee_id = emp.id
        plan.employee_name = emp.display_name
    for f, v in slots.items():
        setattr(plan, f, v)
    plan.year = body.year
    plan.week = body.week
    plan.station_id = station_id


def _commit(db: Session, plan: Planning) -> Planning:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Un planning existe déjà pour cet employé cette semaine.")
    db.refresh(plan)
    return plan


def create_planning(db: Session, scope: AccessScope, body: PlanningIn) -> Planning:
    plan = Planning()
    _apply(db, scope, plan, body)
    db.add(plan)
    plan = _commit(db, plan)
    logger.info("[planning] created id=%s employee=%r %s/%s station=%s",
                plan.id, plan.employee_name, plan.week, plan.year, plan.station_id)
    return plan


def get_planning(db: Session, scope: AccessScope, planning_id: int) -> Planning:
    plan = db.get(Planning, planning_id)
    if plan is None:
        raise NotFoundError("Planning non trouvé.")
    scope.ensure_access(plan.station_id)
    return plan


def update_planning(db: Session, scope: AccessScope, planning_id: int, body: PlanningIn) -> Planning:
    plan = get_planning(db, scope, planning_id)
    _apply(db, scope, plan, body)
    plan = _commit(db, plan)
    logger.info("[planning] updated id=%s", plan.id)
    return plan


def delete_planning(db: Session, scope: AccessScope, planning_id: int) -> None:
    plan = get_planning(db, scope, planning_id)
    # presences are kept: they are keyed on the employee, not on the planning row
    db.delete(plan)
    db.commit()
    logger.info("[planning] deleted id=%s", planning_id)
