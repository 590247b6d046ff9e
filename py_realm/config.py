"""Configuration management."""

import os
from pathlib import Path
from typing import Literal

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values from a local .env only fill in keys missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    for key, value in file_env.items():
        if key not in os.environ and value is not None:
            os.environ[key] = value


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(env_prefix="PY_REALM_", extra="ignore")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="json", description="Logging format (plain or json)"
    )

    # Realm defaults
    vassal_cycle_guard: bool = Field(
        default=True, description="Reject vassalships that would form a cycle"
    )
    route_heuristic: Literal["euclidean", "zero"] = Field(
        default="euclidean", description="Shortest route heuristic (euclidean or zero)"
    )
    tax_share: float = Field(
        default=0.1, ge=0.0, le=1.0, description="Share of a vassal's tax passed to its master"
    )


settings = Settings()
