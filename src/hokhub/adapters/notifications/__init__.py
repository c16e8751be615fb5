"""Moderation notification adapters."""

from __future__ import annotations

from .messages import render
from .webhook import LoggingNotifier, NullNotifier, WebhookNotifier, build_notifier

__all__ = [
    "LoggingNotifier",
    "NullNotifier",
    "WebhookNotifier",
    "build_notifier",
    "render",
]
