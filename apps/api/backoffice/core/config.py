# apps/api/backoffice/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_NAME: str = "Station Back Office API"
    DEBUG: bool = False
    TZ: str = "Europe/Paris"
    LOG_LEVEL: str = "INFO"

    # DB & Auth
    DATABASE_URL: str
    JWT_SECRET: str
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24   # 24h, front end renews on expiry

    # First admin account, created at startup only when the users table is empty
    BOOTSTRAP_ADMIN_EMAIL: str = ""
    BOOTSTRAP_ADMIN_PASSWORD: str = ""

    # "https://foo.com,https://bar.com" ; empty -> local dev origins
    CORS_ALLOW_ORIGINS: str = ""

    # .env support, unknown env vars ignored
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
