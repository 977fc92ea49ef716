# apps/api/backoffice/db/models_planning.py
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from backoffice.db.base import Base
from backoffice.models.models import Employee, Station


class Planning(Base):
    __tablename__ = "plannings"

    id = Column(Integer, primary_key=True, index=True)
    # Display name "Nom Prénom", kept for legacy rows that have no employee_id.
    employee_name = Column(String(255), nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=True, index=True)
    # each slot: None/"" or "8h-16h"
    monday = Column(String(16), nullable=True)
    tuesday = Column(String(16), nullable=True)
    wednesday = Column(String(16), nullable=True)
    thursday = Column(String(16), nullable=True)
    friday = Column(String(16), nullable=True)
    saturday = Column(String(16), nullable=True)
    sunday = Column(String(16), nullable=True)
    year = Column(Integer, nullable=False)
    week = Column(Integer, nullable=False)   # ISO week 1..53
    station_id = Column(Integer, ForeignKey("stations.id"), nullable=True, index=True)

    employee = relationship(Employee, lazy="joined")
    station = relationship(Station, lazy="joined")

    __table_args__ = (
        UniqueConstraint("employee_name", "year", "week", name="uq_planning_name_week"),
        UniqueConstraint("employee_id", "year", "week", name="uq_planning_employee_week"),
    )

    @property
    def station_name(self):
        return self.station.name if self.station is not None else None


class Presence(Base):
    __tablename__ = "presences"

    id = Column(Integer, primary_key=True, index=True)
    week = Column(Integer, nullable=False)
    day = Column(String(16), nullable=False)          # Lundi..Dimanche
    start_time = Column(String(16), nullable=False, default="")
    end_time = Column(String(16), nullable=False, default="")
    year = Column(Integer, nullable=False)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    station_id = Column(Integer, ForeignKey("stations.id"), nullable=False, index=True)
    is_present = Column(Boolean, nullable=False, default=False)

    employee = relationship(Employee, lazy="joined")
    station = relationship(Station, lazy="joined")

    __table_args__ = (
        UniqueConstraint("week", "day", "year", "employee_id", name="uq_presence_employee_day"),
    )

    @property
    def employee_name(self):
        return self.employee.display_name if self.employee is not None else None

    @property
    def station_name(self):
        return self.station.name if self.station is not None else None
