# apps/api/backoffice/api/routes_settings.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backoffice.deps import get_db, RolesAllowed
from backoffice.schemas.settings import AppSettingsOut, AppSettingsUpdateIn
from backoffice.services import settings_service

router = APIRouter(prefix="/settings", tags=["settings"])

@router.get("", response_model=AppSettingsOut, dependencies=[Depends(RolesAllowed("admin"))])
def get_settings(db: Session = Depends(get_db)):
    return settings_service.read_all(db)

@router.put("", response_model=AppSettingsOut, dependencies=[Depends(RolesAllowed("admin"))])
def update_settings(body: AppSettingsUpdateIn, db: Session = Depends(get_db)):
    return settings_service.update(db, body.model_dump(exclude_unset=True))
