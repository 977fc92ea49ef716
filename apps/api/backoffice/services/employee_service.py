# apps/api/backoffice/services/employee_service.py
from __future__ import annotations
from typing import List, Optional

from sqlalchemy.orm import Session

from backoffice.core.errors import NotFoundError, ValidationError
from backoffice.models.models import Employee, Station


def list_roster(db: Session, station_id: Optional[int] = None) -> List[Employee]:
    q = db.query(Employee)
    if station_id is not None:
        q = q.filter(Employee.station_id == station_id)
    return q.order_by(Employee.last_name, Employee.first_name, Employee.id).all()


def find_by_display_name(db: Session, name: str) -> Optional[Employee]:
    """First employee whose "Nom Prénom" equals name (lowest id on duplicates)."""
    name = (name or "").strip()
    if not name:
        return None
    return (
        db.query(Employee)
        .filter((Employee.last_name + " " + Employee.first_name) == name)
        .order_by(Employee.id)
        .first()
    )


def resolve_employee(
    db: Session,
    employee_id: Optional[int] = None,
    employee_name: Optional[str] = None,
    not_found: str = "Employé introuvable.",
) -> Employee:
    if employee_id is None and not (employee_name or "").strip():
        raise ValidationError("L'employé est requis.")
    emp = db.get(Employee, employee_id) if employee_id is not None else find_by_display_name(db, employee_name)
    if emp is None:
        raise NotFoundError(not_found)
    return emp


def get_station(db: Session, station_id: int, message: str = "Station non trouvée.") -> Station:
    st = db.get(Station, station_id)
    if st is None:
        raise NotFoundError(message)
    return st
