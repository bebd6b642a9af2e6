"""
Settings and logging setup for FluentFlow.

Settings come from environment variables, optionally seeded from a .env
file:
- FLUENTFLOW_PROGRESS_DB: progress database path
- FLUENTFLOW_LEARNER_ID: learner identifier
- FLUENTFLOW_DEVELOPMENT_MODE: unlock every module for access checks
- FLUENTFLOW_LOG_LEVEL: logging level name
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from fluentflow.progression.store import DEFAULT_PROGRESS_DB

ENV_PREFIX = "FLUENTFLOW_"
TRUTHY = {"1", "true", "yes", "on"}
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    progress_db: Path = DEFAULT_PROGRESS_DB
    learner_id: str = "default"
    development_mode: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def log_level_known(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def _env(name: str) -> Optional[str]:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Load settings from the environment.

    Args:
        env_file: Optional .env file; variables already set in the
            environment take precedence over it

    Returns:
        Settings with defaults for anything unset
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    values = {}
    progress_db = _env("PROGRESS_DB")
    if progress_db is not None:
        values["progress_db"] = Path(progress_db).expanduser()
    learner_id = _env("LEARNER_ID")
    if learner_id is not None:
        values["learner_id"] = learner_id
    development_mode = _env("DEVELOPMENT_MODE")
    if development_mode is not None:
        values["development_mode"] = development_mode.lower() in TRUTHY
    log_level = _env("LOG_LEVEL")
    if log_level is not None:
        values["log_level"] = log_level

    return Settings(**values)


def configure_logging(level: str = "INFO"):
    """Set up root logging in the project's standard format."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
