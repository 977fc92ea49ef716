from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from backoffice.deps import get_db, RolesAllowed
from backoffice.models.models import Station, User
from backoffice.schemas.user import UserOut, UserUpdateIn

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=list[UserOut], dependencies=[Depends(RolesAllowed("admin"))])
def list_users(limit: int = Query(50, ge=1, le=200), offset: int = Query(0, ge=0), db: Session = Depends(get_db)):
    return db.query(User).order_by(User.id.desc()).offset(offset).limit(limit).all()

@router.put("/{user_id}", response_model=UserOut, dependencies=[Depends(RolesAllowed("admin"))])
def update_user(user_id: int, body: UserUpdateIn, db: Session = Depends(get_db)):
    u = db.get(User, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="Utilisateur non trouvé")
    email = body.email.strip().lower()
    if email != u.email:
        other = db.query(User).filter(User.email == email).first()
        if other and other.id != u.id:
            raise HTTPException(status_code=409, detail="Cet email est déjà utilisé")
    station_id = body.station_id if body.role == "manager" else None
    if station_id is not None and db.get(Station, station_id) is None:
        raise HTTPException(status_code=404, detail="Station non trouvée.")
    u.name = body.name.strip()
    u.email = email
    u.role = body.role
    u.station_id = station_id
    db.commit()
    db.refresh(u)
    return u

@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db), me: User = Depends(RolesAllowed("admin"))):
    u = db.get(User, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="Utilisateur non trouvé")
    if u.id == me.id:
        raise HTTPException(status_code=400, detail="Impossible de supprimer votre propre compte")
    db.delete(u)
    db.commit()
    return {"ok": True}
