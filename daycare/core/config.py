# daycare/core/config.py
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Prefer .env.production if present, else default .env
load_dotenv(dotenv_path=".env.production")
load_dotenv()


class Settings(BaseSettings):
    database_url: str = ""
    session_secret: str = "daycare-dev-session-secret"  # 🔐 override in production
    session_max_age_seconds: int = 12 * 3600
    sql_echo: bool = False
    log_level: str = "INFO"
    cors_origins: str = "*"
    center_timezone: str = "America/New_York"
    seed_director_pin: Optional[str] = None

    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
