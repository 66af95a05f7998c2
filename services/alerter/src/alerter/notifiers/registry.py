"""
Notifier registry.

The registry maps notifier type names to instances. It is built once when
the alerter starts and exposed as a read-only mapping, so concurrent
message handlers can share it without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

import structlog

from volt_common.config import Settings

from .base import Notifier
from .email import EmailNotifier
from .pagerduty import PagerdutyNotifier
from .slack import SlackNotifier

logger = structlog.get_logger()


def build_registry(notifiers: Iterable[Notifier]) -> Mapping[str, Notifier]:
    """Index *notifiers* by their type name.

    Raises:
        ValueError: If two notifiers identify with the same name.
    """
    registry: dict[str, Notifier] = {}
    for notifier in notifiers:
        name = notifier.identify()
        if name in registry:
            raise ValueError(f"Duplicate notifier type '{name}'")
        registry[name] = notifier
        logger.info("notifier_registered", notifier=name)
    return MappingProxyType(registry)


def default_notifiers(settings: Settings) -> list[Notifier]:
    """Instantiate the built-in PagerDuty, Slack and email notifiers."""
    return [
        PagerdutyNotifier(
            events_url=settings.pagerduty_events_url,
            timeout=settings.notifier_timeout_s,
        ),
        SlackNotifier(
            default_token=settings.slack_bot_token,
            timeout=settings.notifier_timeout_s,
        ),
        EmailNotifier(
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            sender=settings.email_from,
            timeout=settings.notifier_timeout_s,
        ),
    ]
