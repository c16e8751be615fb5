"""Moderation notification settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

from .env import env_flag, env_text
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

# Discord-style webhooks allow roughly 30 requests per minute per channel.
WEBHOOK_RATE_LIMIT: Final[RateLimit] = RateLimit(max_calls=30, per_seconds=60.0)


@dataclass(frozen=True, slots=True)
class NotificationConfig:
    enabled: bool = False
    webhook_url: str | None = None
    resilience: ResilienceConfig = field(
        default_factory=lambda: ResilienceConfig(
            name="webhook",
            ratelimit=WEBHOOK_RATE_LIMIT,
            default_headers={"Content-Type": "application/json"},
        )
    )


def get_notification_config() -> NotificationConfig:
    enabled = env_flag("HOKHUB_NOTIFICATIONS_ENABLED")
    webhook_url = env_text("HOKHUB_WEBHOOK_URL")
    if webhook_url is not None and not webhook_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"HOKHUB_WEBHOOK_URL must be an http(s) URL: {webhook_url!r}")
    return NotificationConfig(enabled=enabled, webhook_url=webhook_url)
