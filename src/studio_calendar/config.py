"""Centralized configuration.

Settings come from environment variables. A `.env` file in the working
directory (or at $STUDIO_CALENDAR_ENV_FILE) is loaded on import, without
overriding variables that are already set:

    GOOGLE_CLIENT_ID        - OAuth client ID
    GOOGLE_CLIENT_SECRET    - OAuth client secret
    GOOGLE_REDIRECT_URI     - OAuth redirect URI
    GOOGLE_REFRESH_TOKEN    - Stored refresh token (optional)
    CALENDAR_TIME_ZONE      - Default time zone for new events
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_FILE = Path(os.environ.get("STUDIO_CALENDAR_ENV_FILE", ".env"))

DEFAULT_REDIRECT_URI = "http://localhost:3001/api/calendar/oauth2callback"
DEFAULT_TIME_ZONE = "Asia/Jerusalem"


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded: dict[str, str] = {}
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

            # Only set if not already in environment (env vars take precedence)
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


@dataclass(frozen=True)
class Settings:
    """OAuth client and calendar defaults."""

    client_id: str | None = None
    client_secret: str | None = None
    redirect_uri: str = DEFAULT_REDIRECT_URI
    refresh_token: str | None = None
    time_zone: str = DEFAULT_TIME_ZONE

    @classmethod
    def from_env(cls) -> Settings:
        """Read settings from the current environment."""
        return cls(
            client_id=os.environ.get("GOOGLE_CLIENT_ID") or None,
            client_secret=os.environ.get("GOOGLE_CLIENT_SECRET") or None,
            redirect_uri=os.environ.get("GOOGLE_REDIRECT_URI") or DEFAULT_REDIRECT_URI,
            refresh_token=os.environ.get("GOOGLE_REFRESH_TOKEN") or None,
            time_zone=os.environ.get("CALENDAR_TIME_ZONE") or DEFAULT_TIME_ZONE,
        )


def get_config_status() -> dict:
    """Get status of the configured settings.

    Returns:
        Dictionary with configuration status. Secrets are reported as booleans.
    """
    settings = Settings.from_env()
    return {
        "env_file": str(ENV_FILE),
        "env_file_exists": ENV_FILE.exists(),
        "client_id": bool(settings.client_id),
        "client_secret": bool(settings.client_secret),
        "refresh_token": bool(settings.refresh_token),
        "redirect_uri": settings.redirect_uri,
        "time_zone": settings.time_zone,
    }


# Auto-load .env on import
_loaded = _load_env_file(ENV_FILE)
