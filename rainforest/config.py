import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from .database import DATA_DIR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 5000
    data_dir: Path = DATA_DIR
    api_prefix: str = "/api"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    strict_categories: bool = False

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "Settings":
        """Build settings from the environment, reading a .env file first if present."""
        load_dotenv(dotenv_path=env_path)
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=os.getenv("PORT", "5000"),
            data_dir=os.getenv("CATALOG_DATA_DIR") or DATA_DIR,
            api_prefix=os.getenv("API_PREFIX", "/api"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()],
            strict_categories=_flag(os.getenv("STRICT_CATEGORIES", "")),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
