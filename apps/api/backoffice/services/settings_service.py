# apps/api/backoffice/services/settings_service.py
from sqlalchemy.orm import Session
from backoffice.db.models_app_settings import AppSetting

# Key names
APP_NAME_KEY            = "app_name"
DEFAULT_ROLE_KEY        = "default_role"
EMAIL_NOTIFICATIONS_KEY = "email_notifications"
THEME_KEY               = "theme"

DEFAULTS = {
    APP_NAME_KEY: "Gestion Stations",
    DEFAULT_ROLE_KEY: "manager",
    EMAIL_NOTIFICATIONS_KEY: "1",
    THEME_KEY: "dark",
}

# Single read/write
def get_setting(db: Session, key: str, default: str = "") -> str:
    row = db.get(AppSetting, key)
    return row.value if row else default

def set_setting(db: Session, key: str, value: str, commit: bool = True) -> None:
    row = db.get(AppSetting, key)
    if row:
        row.value = value
    else:
        row = AppSetting(key=key, value=value)
        db.add(row)
    if commit:
        db.commit()

# Bool helper
def get_bool(db: Session, key: str, default: bool = False) -> bool:
    val = get_setting(db, key, "1" if default else "0")
    return val in ("1", "true", "True")

def set_bool(db: Session, key: str, value: bool, commit: bool = True) -> None:
    set_setting(db, key, "1" if value else "0", commit=commit)

def seed_defaults(db: Session) -> int:
    """Insert missing keys only; existing values are left alone."""
    created = 0
    for key, value in DEFAULTS.items():
        if db.get(AppSetting, key) is None:
            db.add(AppSetting(key=key, value=value))
            created += 1
    db.commit()
    return created

def read_all(db: Session) -> dict:
    return {
        "app_name": get_setting(db, APP_NAME_KEY, DEFAULTS[APP_NAME_KEY]),
        "default_role": get_setting(db, DEFAULT_ROLE_KEY, DEFAULTS[DEFAULT_ROLE_KEY]),
        "email_notifications": get_bool(db, EMAIL_NOTIFICATIONS_KEY, True),
        "theme": get_setting(db, THEME_KEY, DEFAULTS[THEME_KEY]),
    }

def update(db: Session, data: dict) -> dict:
    # only the keys actually sent
    if data.get("app_name") is not None:
        set_setting(db, APP_NAME_KEY, data["app_name"].strip(), commit=False)
    if data.get("default_role") is not None:
        set_setting(db, DEFAULT_ROLE_KEY, data["default_role"], commit=False)
    if data.get("email_notifications") is not None:
        set_bool(db, EMAIL_NOTIFICATIONS_KEY, bool(data["email_notifications"]), commit=False)
    if data.get("theme") is not None:
        set_setting(db, THEME_KEY, data["theme"], commit=False)
    db.commit()
    return read_all(db)
