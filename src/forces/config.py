"""Runtime settings read from the environment."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONFIG_DIR = Path.home() / ".forces"

TEMPLATES_FILE = "templates.json"
SESSION_FILE = "session.json"


class Settings(BaseModel):
    """Application settings."""

    config_dir: Path = DEFAULT_CONFIG_DIR
    host: str = "codeforces.com"
    http_timeout: float = Field(default=30.0, gt=0)
    run_timeout: float = Field(default=10.0, gt=0)
    log_level: str = "INFO"

    model_config = ConfigDict(extra="forbid")


def load_settings() -> Settings:
    """Load settings from environment variables, honouring a local .env file."""
    load_dotenv()

    # Only pass what is set so model defaults apply otherwise
    env = {
        "config_dir": os.getenv("FORCES_CONFIG_DIR"),
        "host": os.getenv("FORCES_HOST"),
        "http_timeout": os.getenv("FORCES_HTTP_TIMEOUT"),
        "run_timeout": os.getenv("FORCES_RUN_TIMEOUT"),
        "log_level": os.getenv("FORCES_LOG_LEVEL"),
    }
    settings = Settings(**{key: value for key, value in env.items() if value})
    return settings.model_copy(update={"config_dir": settings.config_dir.expanduser()})
