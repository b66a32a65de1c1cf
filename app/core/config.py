# app/core/config.py
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

REQUIRED_ENV_VARS = ("DATABASE_URL",)


class Settings(BaseModel):
    """Runtime configuration read from `.env` and the process environment."""

    model_config = ConfigDict(extra="ignore")

    PROJECT_NAME: str = "professionals-api"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    DATABASE_URL: str
    DB_ECHO: bool = False


def load_settings(*, load_env: bool = True) -> Settings:
    if load_env:
        load_dotenv()

    missing = [key for key in REQUIRED_ENV_VARS if not os.getenv(key)]
    if missing:
        raise RuntimeError(
            f"Missing required environment variables: {', '.join(sorted(missing))}. "
            "Set them in `.env` before starting the application."
        )

    try:
        return Settings.model_validate(dict(os.environ))
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
