"""
Alerter service.

Receives alert messages from health checkers and routes each one to the
PagerDuty, Slack or email notifiers configured for its alerter keys.
"""

from .dispatcher import Alerter
from .errors import DispatchOutcome, KeyFailure

__all__ = [
    "Alerter",
    "DispatchOutcome",
    "KeyFailure",
]
