"""Settings dataclass for fb configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

CONFIG_DIR = Path.home() / ".fb"
CONFIG_FILE_NAME = "config.yaml"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Maps environment variable overrides to Settings attributes
ENV_OVERRIDES: dict[str, str] = {
    "FB_AUTH_KEY": "auth_key",
    "FB_ORG_ID": "org_id",
    "FB_USER_EMAIL": "user_email",
    "FB_TIMEOUT_SECONDS": "timeout_seconds",
}

REQUIRED_FIELDS: tuple[str, ...] = ("auth_key", "org_id", "user_email")


@dataclass
class Settings:
    """Configuration values for talking to Flow Boards.

    Attributes:
        auth_key: API authentication key, sent as a bearer token
        org_id: Organization identifier used for endpoint discovery
        user_email: Email of the user whose tickets are listed
        timeout_seconds: Per-request HTTP timeout
    """

    auth_key: str = ""
    org_id: str = ""
    user_email: str = ""
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def missing_fields(self) -> list[str]:
        """Return the names of required fields that are blank."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name).strip()]


__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE_NAME",
    "DEFAULT_TIMEOUT_SECONDS",
    "ENV_OVERRIDES",
    "REQUIRED_FIELDS",
    "Settings",
]
