import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backoffice.core.security import verify_password, create_access_token, get_password_hash
from backoffice.deps import get_db, get_current_user, RolesAllowed
from backoffice.models.models import ROLES, Station, User
from backoffice.schemas.auth import LoginIn, RegisterIn, TokenOut, ProfileUpdateIn, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _check_role(role: str) -> None:
    if role not in ROLES:
        raise HTTPException(
            status_code=400,
            detail=f"Rôle invalide: {role}. Les rôles valides sont: {', '.join(ROLES)}",
        )


def _token_for(user: User) -> dict:
    token = create_access_token(sub=user.id, role=user.role, station=user.station_id)
    return {"access_token": token, "token_type": "bearer", "user": UserOut.model_validate(user)}


@router.post("/login", response_model=TokenOut)
def login(body: LoginIn, db: Session = Depends(get_db)):
    email = body.email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if not user or not user.is_active or not verify_password(body.password, user.password_hash):
        logger.warning("[auth] login refused for %s", email)
        raise HTTPException(status_code=401, detail="Email ou mot de passe incorrect")
    _check_role(user.role)
    logger.info("[auth] login ok user=%s role=%s", user.id, user.role)
    return _token_for(user)


@router.post("/register", response_model=TokenOut, status_code=201,
             dependencies=[Depends(RolesAllowed("admin"))])
def register(body: RegisterIn, db: Session = Depends(get_db)):
    _check_role(body.role)
    email = body.email.strip().lower()
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=409, detail="Utilisateur déjà existant")
    # only managers are pinned to a station
    station_id = body.station_id if body.role == "manager" else None
    if station_id is not None and db.get(Station, station_id) is None:
        raise HTTPException(status_code=404, detail="Station non trouvée.")
    user = User(
        name=body.name.strip(),
        email=email,
        password_hash=get_password_hash(body.password),
        role=body.role,
        station_id=station_id,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("[auth] registered user=%s role=%s station=%s", user.id, user.role, user.station_id)
    return _token_for(user)


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user


@router.put("/me", response_model=UserOut)
def update_profile(body: ProfileUpdateIn, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    email = body.email.strip().lower()
    if email != user.email:
        other = db.query(User).filter(User.email == email).first()
        if other and other.id != user.id:
            raise HTTPException(status_code=409, detail="Cet email est déjà utilisé")
    user.name = body.name.strip()
    user.email = email
    db.commit()
    db.refresh(user)
    return user
