# app/config/settings.py
from pydantic_settings import BaseSettings
from typing import List, Optional
import os

class Settings(BaseSettings):
    # App Info
    app_name: str = "Walt Delivery API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./walt.db")

    # Server
    host: str = "0.0.0.0"
    port: int = int(os.getenv("PORT", 8000))
    cors_origins: List[str] = ["*"]

    # Dispatch
    driver_busy_minutes: int = 60
    max_delivery_distance: int = 20
    fixed_delivery_distance: Optional[int] = None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = 'ignore'

settings = Settings()
