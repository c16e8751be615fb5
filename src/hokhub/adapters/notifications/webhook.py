"""Notifier adapters: chat webhook, log output, or nothing."""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import wait
from typing import TYPE_CHECKING

import httpx

from hokhub.adapters.http_resilience import ResilientClient

from .messages import render

if TYPE_CHECKING:
    from collections.abc import Mapping
    from concurrent.futures import Future

    from hokhub.config import NotificationConfig, ResilienceConfig
    from hokhub.domain.ports import NotificationEvent, Notifier

log = logging.getLogger(__name__)


class NullNotifier:
    def notify(self, event: NotificationEvent, payload: Mapping[str, object]) -> None:
        log.debug("Notifications disabled, dropping %s for %s", event, payload.get("id"))


class LoggingNotifier:
    def notify(self, event: NotificationEvent, payload: Mapping[str, object]) -> None:
        subject, message = render(event, payload)
        log.info("Notification: %s\n%s", subject, message)


class WebhookNotifier:
    """Post ``{"content": ...}`` to a Discord/Slack style webhook.

    Deliveries are queued onto one daemon worker thread running its own event
    loop, so the caller never waits on the network and every post shares one
    client and its rate limiter. Delivery failures are logged and dropped.
    """

    def __init__(
        self,
        url: str,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.config = config
        self._transport = transport
        self._lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._client: ResilientClient | None = None
        self._pending: set[Future[None]] = set()

    @property
    def worker_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def notify(self, event: NotificationEvent, payload: Mapping[str, object]) -> None:
        subject, message = render(event, payload)
        body = {"content": f"**{subject}**\n\n{message}"}
        with self._lock:
            loop = self._ensure_worker()
            future = asyncio.run_coroutine_threadsafe(self._deliver(subject, body), loop)
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def flush(self, timeout: float | None = None) -> None:
        """Wait for queued deliveries, e.g. before a CLI process exits."""

        with self._lock:
            pending = set(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def close(self, timeout: float | None = None) -> None:
        """Drain the queue, close the client and stop the worker thread."""

        self.flush(timeout)
        with self._lock:
            loop, thread, client = self._loop, self._thread, self._client
            self._loop = None
            self._thread = None
            self._client = None
        if loop is None or thread is None or client is None:
            return
        asyncio.run_coroutine_threadsafe(client.aclose(), loop).result(timeout)
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout)

    def _ensure_worker(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        loop = asyncio.new_event_loop()
        self._client = ResilientClient(self.config, transport=self._transport)
        self._thread = threading.Thread(
            target=self._run_loop, args=(loop,), name=f"{self.config.name}-worker", daemon=True
        )
        self._thread.start()
        self._loop = loop
        return loop

    @staticmethod
    def _run_loop(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        try:
            loop.run_forever()
        finally:
            loop.close()

    def _forget(self, future: Future[None]) -> None:
        with self._lock:
            self._pending.discard(future)

    async def _deliver(self, subject: str, body: dict[str, str]) -> None:
        if self._client is None:
            return
        try:
            response = await self._client.post_json(self.url, body)
        except httpx.HTTPError as exc:
            log.warning("Failed to send notification %r: %s", subject, exc)
            return
        if response.is_success:
            log.info("Notification sent: %s", subject)
        else:
            log.warning(
                "Webhook answered %s for notification %r", response.status_code, subject
            )


def build_notifier(config: NotificationConfig) -> Notifier:
    if not config.enabled:
        return NullNotifier()
    if config.webhook_url is None:
        return LoggingNotifier()
    return WebhookNotifier(config.webhook_url, config.resilience)
