"""Configuration settings for the planefinder backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("planefinder.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_optional_float(env_var: str) -> float | None:
    value = os.getenv(env_var)
    return float(value) if value else None


@lru_cache(maxsize=1)
def _ssm_client():
    # Default to a region so lookups do not fail in environments without AWS
    # configuration (e.g. CI test runners).
    return boto3.client(
        "ssm",
        region_name=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1",
    )


@lru_cache(maxsize=4)
def get_feed_credentials(parameter_name: str) -> tuple[str, str]:
    """Fetch ``user:password`` feed credentials from AWS SSM Parameter Store.

    The value is cached in-memory to avoid repeated SSM calls. Any failure to
    retrieve or parse the parameter results in a runtime error.
    """

    try:
        response = _ssm_client().get_parameter(Name=parameter_name, WithDecryption=True)
        value = response.get("Parameter", {}).get("Value")
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - AWS error passthrough
        logger.error("Failed to load feed credentials from SSM: %s", exc)
        raise RuntimeError("Unable to load feed credentials from SSM") from exc

    if not value or ":" not in value:
        logger.error("Feed credentials in SSM are empty or malformed")
        raise RuntimeError("Feed credentials not configured in SSM")

    username, _, password = value.partition(":")
    return username, password


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    planefinder_env: str = os.getenv("PLANEFINDER_ENV", "local")
    log_level: str = os.getenv("PLANEFINDER_LOG_LEVEL", "INFO")

    # Traffic-state feed
    feed_base_url: str = os.getenv(
        "FEED_BASE_URL",
        "https://opensky-network.org/api/states/all",
    )
    feed_timeout: float = float(os.getenv("FEED_TIMEOUT", "10.0"))
    feed_username: str | None = os.getenv("FEED_USERNAME")
    feed_password: str | None = os.getenv("FEED_PASSWORD")
    feed_credentials_ssm_param: str | None = os.getenv("FEED_CREDENTIALS_SSM_PARAM")

    # Tracker cadence
    ticks_per_second: int = int(os.getenv("TRACKER_TICKS_PER_SECOND", "60"))
    seconds_per_query: int = int(os.getenv("TRACKER_SECONDS_PER_QUERY", "10"))
    seconds_per_cleanup: int = int(os.getenv("TRACKER_SECONDS_PER_CLEANUP", "30"))
    stale_after_seconds: float = float(os.getenv("TRACKER_STALE_AFTER_SECONDS", "30"))
    coordinate_tolerance: float = float(os.getenv("TRACKER_COORDINATE_TOLERANCE", "0.5"))
    live_data: bool = _get_bool("TRACKER_LIVE_DATA", default=True)
    default_center_lat: float | None = _get_optional_float("TRACKER_DEFAULT_CENTER_LAT")
    default_center_lon: float | None = _get_optional_float("TRACKER_DEFAULT_CENTER_LON")

    # Demo mode
    simulation_plane_count: int = int(os.getenv("SIMULATION_PLANE_COUNT", "20"))
    simulation_speedup: float = float(os.getenv("SIMULATION_SPEEDUP", "1.0"))

    # Heading attribute written to the render target. Creation and update
    # offsets differ on purpose; see HeadingPolicy.
    heading_offset_light_create: float = float(
        os.getenv("RENDER_HEADING_OFFSET_LIGHT_CREATE", "180")
    )
    heading_offset_heavy_create: float = float(
        os.getenv("RENDER_HEADING_OFFSET_HEAVY_CREATE", "0")
    )
    heading_offset_update: float = float(os.getenv("RENDER_HEADING_OFFSET_UPDATE", "180"))

    def feed_auth(self) -> tuple[str, str] | None:
        """Return basic-auth credentials for the feed, if any are configured."""

        if self.feed_username and self.feed_password:
            return self.feed_username, self.feed_password
        if self.feed_credentials_ssm_param:
            return get_feed_credentials(self.feed_credentials_ssm_param)
        return None


settings = Settings()

__all__ = ["settings", "Settings", "get_feed_credentials"]
