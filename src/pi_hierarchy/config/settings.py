"""Runtime settings loaded from the environment (optionally a .env file)."""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel

from ..models.errors import ConfigurationError

REQUIRED_VARS = ("JIRA_URL", "JIRA_EMAIL", "JIRA_API_TOKEN")


class Settings(BaseModel):
    """Jira connection and storage settings."""

    jira_url: str
    jira_email: str
    jira_api_token: str
    cache_file: Optional[Path] = None
    fields_file: Optional[Path] = None


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from environment variables.

    Args:
        env_file: Optional .env file loaded before reading the environment

    Returns:
        Loaded settings

    Raises:
        ConfigurationError: If a required Jira variable is missing
    """
    if env_file is not None:
        env_path = Path(env_file)
        if not env_path.exists():
            raise ConfigurationError(f".env file not found: {env_path}")
        load_dotenv(env_path)
    else:
        load_dotenv()

    missing = [var for var in REQUIRED_VARS if not os.getenv(var)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    cache_file = os.getenv("PI_HIERARCHY_CACHE_FILE", "")
    fields_file = os.getenv("PI_HIERARCHY_FIELDS", "")

    return Settings(
        jira_url=os.environ["JIRA_URL"],
        jira_email=os.environ["JIRA_EMAIL"],
        jira_api_token=os.environ["JIRA_API_TOKEN"],
        cache_file=Path(cache_file) if cache_file else None,
        fields_file=Path(fields_file) if fields_file else None,
    )
