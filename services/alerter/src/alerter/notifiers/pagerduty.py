"""
PagerDuty notifier.

Sends PagerDuty Events API v2 requests: warning/critical messages trigger
an incident, resolve messages resolve it. The incident is keyed on the
message source so that a later resolve closes the matching trigger.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from volt_common.models import AlerterConfig, Message, MessageType

from ..errors import ConfigValidationError, SendError
from .base import Notifier
from .formatter import format_alert_text

logger = structlog.get_logger()

_DEFAULT_EVENTS_URL = "https://events.pagerduty.com/v2/enqueue"
_DEFAULT_TIMEOUT_S = 10.0


class PagerdutyNotifier(Notifier):
    """Deliver alerts as PagerDuty Events API v2 events.

    Options:
        routing_key: Integration key of the target PagerDuty service (required).

    Args:
        events_url: Events API endpoint.
        timeout: Per-request timeout in seconds.
    """

    name: str = "pagerduty"

    def __init__(
        self,
        *,
        events_url: str = _DEFAULT_EVENTS_URL,
        timeout: float = _DEFAULT_TIMEOUT_S,
    ) -> None:
        self.events_url = events_url
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Return (and lazily create) the shared ``httpx.AsyncClient``."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def validate_config(self, config: AlerterConfig) -> None:
        self._require(config, "routing_key")
        if any(ch.isspace() for ch in config.options["routing_key"]):
            raise ConfigValidationError("pagerduty 'routing_key' must not contain whitespace")

    def build_event(self, msg: Message, config: AlerterConfig) -> dict[str, Any]:
        """Build the Events API v2 body for *msg*."""
        event: dict[str, Any] = {
            "routing_key": config.options["routing_key"],
            "dedup_key": msg.source,
        }
        if msg.type == MessageType.RESOLVE.value:
            event["event_action"] = "resolve"
            return event

        event["event_action"] = "trigger"
        event["payload"] = {
            "summary": msg.title or format_alert_text(msg).splitlines()[0],
            "source": msg.source,
            "severity": "critical" if msg.type == MessageType.CRITICAL.value else "warning",
            "custom_details": {
                "text": msg.text,
                "count": msg.count,
                **(msg.contents or {}),
            },
        }
        return event

    async def send(self, msg: Message, config: AlerterConfig) -> None:
        body = self.build_event(msg, config)
        log = logger.bind(correlation_id=msg.correlation_id, notifier=self.name)
        try:
            client = await self._get_client()
            resp = await client.post(self.events_url, json=body)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SendError(
                f"PagerDuty returned {exc.response.status_code}: {exc.response.text[:200]}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SendError(f"PagerDuty request failed: {exc}") from exc
        log.info("pagerduty_delivered", status=resp.status_code, action=body["event_action"])

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
