"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


# Used only when JWT_SECRET is not configured. Never deploy with it.
DEV_JWT_SECRET = "fleet-dev-secret-change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Fleet Expenses"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database
    DATABASE_URL: str = "sqlite:///./fleet_expenses.db"
    DB_ECHO: bool = False
    DB_TIMEOUT_SECONDS: int = 10

    # JWT
    JWT_SECRET: str = ""
    ACCESS_TOKEN_EXPIRE_HOURS: int = 72

    # Passwords
    BCRYPT_ROUNDS: int = 10

    # Seeded administrator
    DEFAULT_ADMIN_USERNAME: str = "Admin"
    DEFAULT_ADMIN_PASSWORD: str = "Rota@2026"

    # Whether anonymous callers may create (non-admin) accounts
    ALLOW_SELF_REGISTRATION: bool = True

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:5173"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def check_bcrypt_rounds(cls, v):
        # bcrypt accepts 4..31
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @property
    def jwt_secret(self) -> str:
        """Signing secret, falling back to the development secret."""
        return self.JWT_SECRET or DEV_JWT_SECRET

    @property
    def using_dev_secret(self) -> bool:
        return not self.JWT_SECRET

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
