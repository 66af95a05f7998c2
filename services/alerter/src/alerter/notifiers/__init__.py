"""
Notifier backends package.

Contains the abstract Notifier base class, the registry helpers, and the
built-in PagerDuty, Slack and email implementations.
"""

from .base import Notifier
from .email import EmailNotifier
from .pagerduty import PagerdutyNotifier
from .registry import build_registry, default_notifiers
from .slack import SlackNotifier

__all__ = [
    "EmailNotifier",
    "Notifier",
    "PagerdutyNotifier",
    "SlackNotifier",
    "build_registry",
    "default_notifiers",
]
