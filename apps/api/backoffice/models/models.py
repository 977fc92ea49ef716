# apps/api/backoffice/models/models.py
from datetime import datetime, date
from sqlalchemy import Integer, String, Date, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from backoffice.db.base import Base

ROLES = ("manager", "mainManager", "admin")
POSITIONS = ("manager", "cashier", "attendant", "maintenance")

class Station(Base):
    __tablename__ = "stations"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(120), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    capacity: Mapped[int] = mapped_column(Integer, default=0)
    pump_count: Mapped[int] = mapped_column(Integer, default=0)

class User(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(32), default="manager")  # manager|mainManager|admin
    # only managers are pinned to a station
    station_id: Mapped[int | None] = mapped_column(ForeignKey("stations.id"), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

class Employee(Base):
    __tablename__ = "employees"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    last_name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)   # nom
    first_name: Mapped[str] = mapped_column(String(120), nullable=False)              # prenom
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    position: Mapped[str] = mapped_column(String(32), default="attendant")  # manager|cashier|attendant|maintenance
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    station_id: Mapped[int | None] = mapped_column(ForeignKey("stations.id"), index=True, nullable=True)
    image: Mapped[str] = mapped_column(String(255), default="")

    station: Mapped[Station | None] = relationship(Station, lazy="joined")

    @property
    def display_name(self) -> str:
        # plannings store this exact string
        return f"{self.last_name} {self.first_name}"
