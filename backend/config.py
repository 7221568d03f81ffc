# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    # Session tokens live for 24 hours
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60
    DATABASE_URL: str = "sqlite:///./database_inventario.db"

    FRONTEND_URL: Optional[str] = None

    # Items below this quantity are reported as low stock
    LOW_STOCK_THRESHOLD: int = 10
    # Trailing window of the movement report
    REPORT_WINDOW_HOURS: int = 6

    # bcrypt work factor
    BCRYPT_ROUNDS: int = 12

    SEED_DEFAULT_DATA: bool = True
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
