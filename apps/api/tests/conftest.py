from __future__ import annotations

import os
import tempfile

# settings are read at import time: point them at a throwaway SQLite file first
_TMP_DIR = tempfile.mkdtemp(prefix="backoffice-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["TZ"] = "Europe/Paris"
os.environ["BOOTSTRAP_ADMIN_EMAIL"] = ""

import pytest
from fastapi.testclient import TestClient

from backoffice.core.access import AccessScope
from backoffice.core.security import create_access_token, get_password_hash
from backoffice.db.base import Base
from backoffice.db.models_planning import Planning
from backoffice.db.session import SessionLocal, engine
from backoffice.main import app
from backoffice.models.models import Employee, Station, User


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


def make_station(db, name: str = "Station Centre") -> Station:
    st = Station(name=name, city="Tunis")
    db.add(st)
    db.commit()
    db.refresh(st)
    return st


def make_employee(db, last_name: str, first_name: str, station: Station | None = None, **kw) -> Employee:
    emp = Employee(
        last_name=last_name,
        first_name=first_name,
        station_id=station.id if station else None,
        **kw,
    )
    db.add(emp)
    db.commit()
    db.refresh(emp)
    return emp


def make_user(db, email: str, role: str, station: Station | None = None, password: str = "secret123") -> User:
    u = User(
        name=email.split("@")[0],
        email=email,
        password_hash=get_password_hash(password),
        role=role,
        station_id=station.id if station else None,
        is_active=True,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def make_plan(db, employee_name: str, year: int, week: int, station: Station | None = None,
              employee: Employee | None = None, **days) -> Planning:
    plan = Planning(
        employee_name=employee_name,
        employee_id=employee.id if employee else None,
        year=year,
        week=week,
        station_id=station.id if station else None,
        **days,
    )
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


def auth_headers(user: User) -> dict:
    token = create_access_token(sub=user.id, role=user.role, station=user.station_id)
    return {"Authorization": f"Bearer {token}"}


def scope_for(user: User) -> AccessScope:
    return AccessScope.from_claims(user.id, user.role, user.station_id)
