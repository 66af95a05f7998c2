"""
Alert message model.

A ``Message`` is produced by a health checker whenever a monitored target
changes state, and is consumed exactly once by the alerter. Field values are
deliberately loose (plain strings, optional contents) so that structurally
invalid messages still deserialise and can be rejected by the alerter's
validator with a meaningful report.
"""

from __future__ import annotations

import enum
from uuid import uuid4

from pydantic import BaseModel, Field, PrivateAttr


class MessageType(str, enum.Enum):
    """Recognised alert classifications."""

    RESOLVE = "resolve"
    WARNING = "warning"
    CRITICAL = "critical"


class Message(BaseModel):
    """An alert event travelling from a checker to the alerter.

    Attributes:
        type: Classification, one of :class:`MessageType` values.
        keys: Alerter keys from the monitor config; each resolves to
              one notifier configuration.
        title: Short description of the alert.
        text: In-depth description of the alert state.
        source: Origin of the alert (checker identity).
        count: How many check attempts were made.
        contents: Checker-specific data for notifiers; ``None`` means unset.
    """

    type: str = ""
    keys: list[str] = Field(default_factory=list)
    title: str = ""
    text: str = ""
    source: str = ""
    count: int = 0
    contents: dict[str, str] | None = None

    _correlation_id: str = PrivateAttr(default="")

    @property
    def correlation_id(self) -> str:
        """Opaque identifier assigned by the alerter on ingestion."""
        return self._correlation_id

    def tag(self) -> str:
        """Assign a fresh correlation identifier and return it."""
        self._correlation_id = str(uuid4())
        return self._correlation_id
