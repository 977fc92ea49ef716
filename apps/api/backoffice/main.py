# apps/api/backoffice/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backoffice.core.config import settings
from backoffice.core.errors import AppError
from backoffice.core.security import get_password_hash
from backoffice.db.base import Base
from backoffice.db.session import engine, SessionLocal

# MODELS (registered on Base.metadata)
import backoffice.models.models
import backoffice.db.models_planning
import backoffice.db.models_app_settings

from backoffice.models.models import User
from backoffice.services.settings_service import seed_defaults

# ROUTERS
from backoffice.api.routes_auth import router as auth_router
from backoffice.api.routes_users import router as users_router
from backoffice.api.routes_org import router as org_router
from backoffice.api.routes_plannings import router as plannings_router
from backoffice.api.routes_presences import router as presences_router
from backoffice.api.routes_attendance import router as attendance_router
from backoffice.api.routes_settings import router as settings_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("backoffice")

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

# ---------------- CORS (env override + local) ----------------
_env_origins = settings.CORS_ALLOW_ORIGINS.strip()
if _env_origins:
    FRONT_ORIGINS = [o.strip() for o in _env_origins.split(",") if o.strip()]
else:
    FRONT_ORIGINS = [
        "http://localhost:5173",      # local vite
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

app.add_middleware(
    CORSMiddleware,
    allow_origins=FRONT_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)
logger.info("[cors] allow_origins=%s", FRONT_ORIGINS)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code in (401, 403):
        logger.warning("[access] %s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def _bootstrap_admin() -> None:
    email = settings.BOOTSTRAP_ADMIN_EMAIL.strip().lower()
    if not email or not settings.BOOTSTRAP_ADMIN_PASSWORD:
        return
    db = SessionLocal()
    try:
        if db.query(User.id).first():
            return
        db.add(User(
            name="Admin",
            email=email,
            password_hash=get_password_hash(settings.BOOTSTRAP_ADMIN_PASSWORD),
            role="admin",
            is_active=True,
        ))
        db.commit()
        logger.info("[startup] bootstrap admin created (%s)", email)
    finally:
        db.close()


@app.on_event("startup")
def on_startup():
    # create tables
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = seed_defaults(db)
        if created:
            logger.info("[startup] %s default settings seeded", created)
    finally:
        db.close()
    _bootstrap_admin()


@app.get("/healthz")
def healthz():
    return {"ok": True}


# Router registration
app.include_router(auth_router)          # /auth
app.include_router(users_router)         # /users
app.include_router(org_router)           # /stations, /employees
app.include_router(plannings_router)     # /plannings
app.include_router(presences_router)     # /presences
app.include_router(attendance_router)    # /attendance
app.include_router(settings_router)      # /settings
