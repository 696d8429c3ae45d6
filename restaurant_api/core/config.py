"""Application configuration."""

from os import getenv

from pydantic import BaseModel

DEV_JWT_SECRET = "dev-only-change-me-to-a-long-random-secret"


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Restaurant API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./restaurant_api.db")
    jwt_secret_key: str = getenv("JWT_SECRET", DEV_JWT_SECRET)
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    cookie_secure: bool = getenv("COOKIE_SECURE", "0") == "1"

    @property
    def uses_dev_secret(self) -> bool:
        return self.jwt_secret_key == DEV_JWT_SECRET
