"""Environment-driven configuration for the SUBJCT MCP server."""

import os
from dataclasses import dataclass
from typing import Optional

API_BASE_URL = "https://api.subjct.ai"
DEFAULT_TIMEOUT = 30.0


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value or None


@dataclass
class SubjctConfig:
    """Connection settings for the SUBJCT API

    Args:
        base_url: API root every endpoint path is appended to
        api_key: Sent as a bearer token on standard requests
        secret_key: Sent as X-Secret-Key on privileged requests
        organisation_id: Fallback for a required organisationId argument
        property_id: Fallback for a required propertyId argument
        timeout: Total request timeout in seconds
    """
    base_url: str = API_BASE_URL
    api_key: Optional[str] = None
    secret_key: Optional[str] = None
    organisation_id: Optional[str] = None
    property_id: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "SubjctConfig":
        """Read SUBJCT_* environment variables, empty values count as unset"""
        return cls(
            base_url=_env("SUBJCT_API_BASE_URL") or API_BASE_URL,
            api_key=_env("SUBJCT_API_KEY"),
            secret_key=_env("SUBJCT_SECRET_KEY"),
            organisation_id=_env("SUBJCT_ORGANISATION_ID"),
            property_id=_env("SUBJCT_PROPERTY_ID"),
            timeout=float(_env("SUBJCT_TIMEOUT") or DEFAULT_TIMEOUT),
        )

    @property
    def argument_defaults(self) -> dict:
        """Tool argument fallbacks taken from the configured IDs"""
        defaults = {}
        if self.organisation_id:
            defaults["organisationId"] = self.organisation_id
        if self.property_id:
            defaults["propertyId"] = self.property_id
        return defaults


__all__ = [
    "API_BASE_URL",
    "SubjctConfig",
]
