# apps/api/backoffice/api/routes_org.py
from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backoffice.core.access import AccessScope
from backoffice.db.models_planning import Planning, Presence
from backoffice.deps import get_db, get_scope, RolesAllowed
from backoffice.models.models import Station, Employee, User
from backoffice.schemas.org import StationIn, StationOut, EmployeeIn, EmployeeOut, EmployeeUpdateIn

router = APIRouter(tags=["org"])

ALL_ROLES = ("manager", "mainManager", "admin")


# ---------- Stations ----------
@router.get("/stations", response_model=list[StationOut], dependencies=[Depends(RolesAllowed(*ALL_ROLES))])
def list_stations(q: str | None = None, db: Session = Depends(get_db)):
    qry = db.query(Station)
    if q:
        like = f"%{q}%"
        qry = qry.filter((Station.name.ilike(like)) | (Station.city.ilike(like)))
    return qry.order_by(Station.name).all()

@router.get("/stations/{station_id}", response_model=StationOut, dependencies=[Depends(RolesAllowed(*ALL_ROLES))])
def get_station(station_id: int, db: Session = Depends(get_db)):
    st = db.get(Station, station_id)
    if not st:
        raise HTTPException(status_code=404, detail="Station non trouvée.")
    return st

@router.post("/stations", response_model=StationOut, status_code=201, dependencies=[Depends(RolesAllowed("admin"))])
def create_station(body: StationIn, db: Session = Depends(get_db)):
    st = Station(**body.model_dump())
    st.name = st.name.strip()
    db.add(st)
    db.commit()
    db.refresh(st)
    return st

@router.put("/stations/{station_id}", response_model=StationOut, dependencies=[Depends(RolesAllowed("admin"))])
def update_station(station_id: int, body: StationIn, db: Session = Depends(get_db)):
    st = db.get(Station, station_id)
    if not st:
        raise HTTPException(status_code=404, detail="Station non trouvée.")
    for k, v in body.model_dump().items():
        setattr(st, k, v)
    db.commit()
    db.refresh(st)
    return st

@router.delete("/stations/{station_id}", dependencies=[Depends(RolesAllowed("admin"))])
def delete_station(station_id: int, db: Session = Depends(get_db)):
    st = db.get(Station, station_id)
    if not st:
        raise HTTPException(status_code=404, detail="Station non trouvée.")
    # no cascade: refuse while rows still point at it
    used = (
        db.query(Employee.id).filter(Employee.station_id == station_id).first()
        or db.query(Planning.id).filter(Planning.station_id == station_id).first()
        or db.query(Presence.id).filter(Presence.station_id == station_id).first()
        or db.query(User.id).filter(User.station_id == station_id).first()
    )
    if used:
        raise HTTPException(status_code=409, detail="Station utilisée (employés, plannings, présences ou utilisateurs)")
    db.delete(st)
    db.commit()
    return {"ok": True}


# ---------- Employees ----------
def _check_station(db: Session, scope: AccessScope, station_id: int | None) -> None:
    if station_id is not None and db.get(Station, station_id) is None:
        raise HTTPException(status_code=404, detail="Station non trouvée.")
    scope.ensure_access(station_id, "Accès refusé: Vous ne pouvez gérer que les employés de votre station.")

def _commit_employee(db: Session, emp: Employee) -> Employee:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Cet email est déjà utilisé")
    db.refresh(emp)
    return emp

@router.get("/employees", response_model=list[EmployeeOut])
def list_employees(
    q: str | None = None,
    station_id: int | None = None,
    limit: int = Query(200, ge=1, le=500),
    offset: int = Query(0, ge=0),
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    qry = db.query(Employee)
    pinned = scope.station_filter()
    if pinned is not None:
        qry = qry.filter(Employee.station_id == pinned)
    elif station_id is not None:
        qry = qry.filter(Employee.station_id == station_id)
    if q:
        like = f"%{q}%"
        qry = qry.filter((Employee.last_name.ilike(like)) | (Employee.first_name.ilike(like)))
    return qry.order_by(Employee.last_name, Employee.first_name).offset(offset).limit(limit).all()

@router.get("/employees/{employee_id}", response_model=EmployeeOut)
def get_employee(employee_id: int, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    emp = db.get(Employee, employee_id)
    if not emp:
        raise HTTPException(status_code=404, detail="Employé non trouvé.")
    scope.ensure_access(emp.station_id)
    return emp

@router.post("/employees", response_model=EmployeeOut, status_code=201)
def create_employee(body: EmployeeIn, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    data = body.model_dump()
    if not scope.can_act_any_station:
        data["station_id"] = scope.require_station()
    _check_station(db, scope, data["station_id"])
    emp = Employee(**data)
    db.add(emp)
    return _commit_employee(db, emp)

@router.patch("/employees/{employee_id}", response_model=EmployeeOut)
def update_employee(employee_id: int, body: EmployeeUpdateIn, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    emp = db.get(Employee, employee_id)
    if not emp:
        raise HTTPException(status_code=404, detail="Employé non trouvé.")
    scope.ensure_access(emp.station_id)

    # only the fields that were sent
    data = body.model_dump(exclude_unset=True)
    if "station_id" in data:
        _check_station(db, scope, data["station_id"])
    for k, v in data.items():
        setattr(emp, k, v)
    return _commit_employee(db, emp)

@router.delete("/employees/{employee_id}")
def delete_employee(employee_id: int, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    emp = db.get(Employee, employee_id)
    if not emp:
        raise HTTPException(status_code=404, detail="Employé non trouvé.")
    scope.ensure_access(emp.station_id)
    if db.query(Presence.id).filter(Presence.employee_id == employee_id).first():
        raise HTTPException(status_code=409, detail="Employé référencé par des présences")
    # plannings fall back to the stored display name
    db.query(Planning).filter(Planning.employee_id == employee_id).update({Planning.employee_id: None})
    db.delete(emp)
    db.commit()
    return {"ok": True}
