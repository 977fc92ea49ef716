# apps/api/backoffice/api/routes_plannings.py
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.core.access import AccessScope
from backoffice.db.models_planning import Planning
from backoffice.deps import get_db, get_scope
from backoffice.schemas.planning import PlanningIn, PlanningOut
from backoffice.services import planning_service
from backoffice.services.reconciliation_service import plan_total_hours

router = APIRouter(prefix="/plannings", tags=["plannings"])


def _to_out(p: Planning) -> PlanningOut:
    out = PlanningOut.model_validate(p, from_attributes=True)
    out.total_hours = plan_total_hours(p)
    return out


@router.get("", response_model=List[PlanningOut])
def list_plannings(
    year: int = Query(..., description="ISO year"),
    week: int = Query(..., description="ISO week 1..53"),
    q: Optional[str] = Query(None, description="employee or station name contains"),
    sort: Literal["employee_name", "total_hours", "station"] = Query("employee_name"),
    direction: Literal["asc", "desc"] = Query("asc"),
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    rows = [_to_out(p) for p in planning_service.list_plannings(db, scope, year, week)]
    if q:
        term = q.strip().lower()
        rows = [r for r in rows if term in r.employee_name.lower() or term in (r.station_name or "").lower()]
    if sort == "total_hours":
        key = lambda r: r.total_hours
    elif sort == "station":
        key = lambda r: (r.station_name or "").lower()
    else:
        key = lambda r: r.employee_name.lower()
    return sorted(rows, key=key, reverse=(direction == "desc"))


@router.post("", response_model=PlanningOut, status_code=201)
def create_planning(body: PlanningIn, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    return _to_out(planning_service.create_planning(db, scope, body))


@router.get("/{planning_id}", response_model=PlanningOut)
def get_planning(planning_id: int, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    return _to_out(planning_service.get_planning(db, scope, planning_id))


@router.put("/{planning_id}", response_model=PlanningOut)
def update_planning(planning_id: int, body: PlanningIn, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    return _to_out(planning_service.update_planning(db, scope, planning_id, body))


@router.delete("/{planning_id}")
def delete_planning(planning_id: int, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    planning_service.delete_planning(db, scope, planning_id)
    return {"message": "Planning supprimé avec succès."}
