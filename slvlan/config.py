"""Credentials and timing settings, loadable from the environment."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

from slvlan.exceptions import ValidationError

DEFAULT_ENDPOINT_URL = "https://api.softlayer.com/rest/v3.1"


class SoftLayerCredentials(BaseModel):
    """SoftLayer API user and key plus the REST endpoint to talk to."""

    username: str
    api_key: str
    endpoint_url: str = DEFAULT_ENDPOINT_URL
    timeout: float = 60.0

    @classmethod
    def from_env(cls) -> SoftLayerCredentials:
        """Build credentials from ``SL_USERNAME``, ``SL_API_KEY``, ``SL_ENDPOINT_URL`` and ``SL_TIMEOUT``."""
        username = os.getenv("SL_USERNAME", "")
        api_key = os.getenv("SL_API_KEY", "")
        if not username or not api_key:
            raise ValidationError("SL_USERNAME and SL_API_KEY must both be set")

        return cls(
            username=username,
            api_key=api_key,
            endpoint_url=os.getenv("SL_ENDPOINT_URL", DEFAULT_ENDPOINT_URL),
            timeout=float(os.getenv("SL_TIMEOUT", "60")),
        )


class VlanSettings(BaseModel):
    """Timing of the order poll and the delete backoff, in seconds."""

    poll_delay: float = Field(default=5.0, ge=0)
    poll_interval: float = Field(default=3.0, gt=0)
    poll_timeout: float = Field(default=600.0, gt=0)
    delete_retry_wait: float = Field(default=60.0, ge=0)
    delete_max_retries: int = Field(default=5, ge=0)

    @classmethod
    def from_env(cls) -> VlanSettings:
        """Override defaults from ``SLVLAN_*`` environment variables."""
        env_map = {
            "poll_delay": "SLVLAN_POLL_DELAY",
            "poll_interval": "SLVLAN_POLL_INTERVAL",
            "poll_timeout": "SLVLAN_POLL_TIMEOUT",
            "delete_retry_wait": "SLVLAN_DELETE_RETRY_WAIT",
            "delete_max_retries": "SLVLAN_DELETE_MAX_RETRIES",
        }
        values = {field: os.environ[var] for field, var in env_map.items() if os.getenv(var)}
        return cls.model_validate(values)
