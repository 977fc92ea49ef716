# apps/api/backoffice/db/models_app_settings.py
from sqlalchemy import Column, String, Text, DateTime, func
from backoffice.db.base import Base

class AppSetting(Base):
    __tablename__ = "app_settings"
    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
