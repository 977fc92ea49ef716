# apps/api/backoffice/api/routes_presences.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backoffice.core.access import AccessScope
from backoffice.deps import get_db, get_scope
from backoffice.schemas.planning import PresenceIn, PresenceOut, PresenceUpdateIn
from backoffice.services import presence_service

router = APIRouter(prefix="/presences", tags=["presences"])


@router.get("", response_model=List[PresenceOut])
def list_presences(
    year: int = Query(...),
    week: int = Query(...),
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    # an empty week is [] rather than 404
    return presence_service.list_presences(db, scope, year, week)


@router.post("", response_model=PresenceOut, status_code=201)
def create_presence(body: PresenceIn, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    return presence_service.create_presence(db, scope, body)


@router.put("/{presence_id}", response_model=PresenceOut)
def update_presence(presence_id: int, body: PresenceUpdateIn, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    return presence_service.update_presence(db, scope, presence_id, body)


@router.delete("/{presence_id}")
def delete_presence(presence_id: int, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    presence_service.delete_presence(db, scope, presence_id)
    return {"message": "Présence supprimée avec succès."}
