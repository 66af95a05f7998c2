"""
Slack notifier.

Posts alerts to a Slack channel through the Web API using a bot token
taken from the alerter config or, failing that, from the service settings.
"""

from __future__ import annotations

import asyncio
import math

import structlog
from slack_sdk.errors import SlackApiError, SlackClientError
from slack_sdk.web.async_client import AsyncWebClient

from volt_common.models import AlerterConfig, Message

from ..errors import ConfigValidationError, SendError
from .base import Notifier
from .formatter import format_alert_text

logger = structlog.get_logger()

_COLORS = {
    "resolve": "good",
    "warning": "warning",
    "critical": "danger",
}


def _build_attachment(msg: Message) -> dict:
    """Build a single colour-coded attachment for *msg*."""
    fields = [
        {"title": k, "value": v, "short": True}
        for k, v in sorted((msg.contents or {}).items())
    ]
    return {
        "fallback": format_alert_text(msg),
        "color": _COLORS.get(msg.type, "#cccccc"),
        "title": msg.title or msg.type,
        "text": msg.text,
        "fields": fields,
        "footer": f"{msg.source} | attempts: {msg.count}",
    }


class SlackNotifier(Notifier):
    """Send alert messages to Slack.

    Options:
        channel: Target channel, e.g. ``#ops`` (required).
        token: Bot token; defaults to the service-wide token.
        username: Display name override.
        icon_url: Avatar override.

    Args:
        default_token: Bot token used when a config carries none.
        timeout: Per-request timeout in seconds.
    """

    name: str = "slack"

    def __init__(self, *, default_token: str = "", timeout: float = 10.0) -> None:
        self.default_token = default_token
        self.timeout = timeout

    def validate_config(self, config: AlerterConfig) -> None:
        self._require(config, "channel")
        if not (config.options.get("token") or self.default_token):
            raise ConfigValidationError(
                "slack config has no 'token' option and no default token is configured"
            )

    async def send(self, msg: Message, config: AlerterConfig) -> None:
        opts = config.options
        client = AsyncWebClient(
            token=opts.get("token") or self.default_token,
            timeout=max(1, math.ceil(self.timeout)),
        )
        kwargs = {
            "channel": opts["channel"],
            "text": f"[{msg.type}] {msg.title}".strip(),
            "attachments": [_build_attachment(msg)],
        }
        if opts.get("username"):
            kwargs["username"] = opts["username"]
        if opts.get("icon_url"):
            kwargs["icon_url"] = opts["icon_url"]

        log = logger.bind(correlation_id=msg.correlation_id, notifier=self.name)
        try:
            await client.chat_postMessage(**kwargs)
        except SlackApiError as exc:
            raise SendError(f"Slack API error: {exc.response.get('error', exc)}") from exc
        except (SlackClientError, OSError, asyncio.TimeoutError) as exc:
            raise SendError(f"Slack request failed: {exc}") from exc
        log.info("slack_delivered", channel=opts["channel"])
