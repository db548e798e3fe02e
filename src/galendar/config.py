"""Centralized configuration.

Credentials live in the user's credentials directory:
    ~/.credentials/galendar_client_secret.json - Google OAuth client credentials
    ~/.credentials/galendar_client_token.json  - Google OAuth tokens

Settings are read from the environment. This module auto-loads
``~/.galendar.env`` (or the file named by GALENDAR_ENV_FILE) on import;
variables already set in the environment take precedence.
"""

import logging.config
import os
from datetime import timedelta
from pathlib import Path


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            # Remove surrounding quotes
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


ENV_FILE = Path(os.environ.get("GALENDAR_ENV_FILE", "~/.galendar.env")).expanduser()

# Auto-load before reading any setting below
_loaded = _load_env_file(ENV_FILE)

CREDENTIALS_DIR = Path(os.environ.get("GALENDAR_CREDENTIALS_DIR", "~/.credentials")).expanduser()
GOOGLE_CREDENTIALS = CREDENTIALS_DIR / "galendar_client_secret.json"
GOOGLE_TOKEN = CREDENTIALS_DIR / "galendar_client_token.json"

DEFAULT_CALENDAR = "primary"
LOOKAHEAD = timedelta(hours=48)
MAX_RESULTS = 10


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def log_level() -> str:
    """Log level name, WARNING when unset or unknown."""
    level = os.environ.get("GALENDAR_LOG_LEVEL", "WARNING").upper()
    return level if level in LOG_LEVELS else "WARNING"


def color_mode() -> str:
    """Color setting: "auto", "always" or "never"."""
    mode = os.environ.get("GALENDAR_COLOR", "auto").lower()
    return mode if mode in ("auto", "always", "never") else "auto"


def configure_logging() -> None:
    """Send log records to stderr so they never mix with the listing."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "level": log_level(),
                    "stream": "ext://sys.stderr",
                    "formatter": "standard",
                }
            },
            "root": {"handlers": ["default"], "level": log_level()},
        }
    )
