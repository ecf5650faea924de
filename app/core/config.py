# app/core/config.py
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./tasks.db"

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    REQUEST_TIMEOUT: float = 5.0  # seconds per request
    SCHEMA_TIMEOUT: float = 5.0
    SHUTDOWN_TIMEOUT: int = 10

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
