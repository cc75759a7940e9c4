import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///./fiberapi.db"

_DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _split_origins(value: str) -> List[str]:
    return [o.strip() for o in value.split(",") if o.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the API process."""

    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False
    cors_origins: List[str] = field(default_factory=lambda: list(_DEFAULT_CORS_ORIGINS))
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment (and a local .env file, if any)"""
        load_dotenv()

        origins = list(_DEFAULT_CORS_ORIGINS)
        origins.extend(_split_origins(os.getenv("CORS_ORIGINS", "")))

        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            sql_echo=_env_flag(os.getenv("SQL_ECHO", "false")),
            cors_origins=origins,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
