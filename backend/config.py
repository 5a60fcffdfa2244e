# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, List, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    # Local SQLite file by default, any SQLAlchemy URL in deployment
    DATABASE_URL: str = "sqlite:///./database_shop.db"

    # Locale of user-facing validation / conflict messages ("en", "id")
    LOCALE: str = "en"
    LOG_LEVEL: str = "INFO"

    FRONTEND_URL: Optional[str] = None
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

    @property
    def allowed_origins(self) -> List[str]:
        origins = list(self.CORS_ORIGINS)
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins

settings = Settings()
