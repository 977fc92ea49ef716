import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from backoffice.core.access import AccessScope
from backoffice.core.security import decode_access_token, JWTError
from backoffice.db.session import get_db
from backoffice.models.models import User

logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> str | None:
    auth = request.headers.get("authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    raw = _bearer_token(request)
    if not raw:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Accès refusé. Aucun token fourni.")
    try:
        payload = decode_access_token(raw)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token invalide ou expiré.")
    sub = payload.get("sub")
    if not sub or not str(sub).isdigit():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token invalide ou expiré.")
    user = db.get(User, int(sub))
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Utilisateur non authentifié.")
    # token claims are what the scope trusts (station included)
    request.state.token_claims = payload
    return user


def get_scope(request: Request, user: User = Depends(get_current_user)) -> AccessScope:
    claims = getattr(request.state, "token_claims", {}) or {}
    station = claims.get("station")
    return AccessScope.from_claims(
        user_id=user.id,
        role=claims.get("role") or user.role,
        station_id=int(station) if station is not None else None,
    )


def RolesAllowed(*roles: str):
    def dep(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning("[auth] role %s refused (allowed: %s)", user.role, ",".join(roles))
            raise HTTPException(status_code=403, detail="Accès refusé: Rôle non autorisé.")
        return user
    return dep
