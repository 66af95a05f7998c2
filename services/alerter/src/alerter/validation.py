"""
Structural validation of inbound alert messages.

Runs once per message, before any config lookups, so that malformed
messages never cost a store round-trip.
"""

from __future__ import annotations

from volt_common.models import Message, MessageType

from .errors import MessageValidationError

VALID_TYPES: tuple[str, ...] = tuple(t.value for t in MessageType)


def validate_message(msg: Message) -> None:
    """Raise :class:`MessageValidationError` if *msg* cannot be dispatched.

    A message needs at least one key, a non-empty source, contents that are
    set (an empty mapping is fine) and a recognised type.
    """
    if not msg.keys:
        raise MessageValidationError("Message must have at least one element in 'keys'")

    if not msg.source:
        raise MessageValidationError("Message must have the 'source' value filled out")

    if msg.contents is None:
        raise MessageValidationError("Message 'contents' must be filled out")

    if msg.type not in VALID_TYPES:
        raise MessageValidationError(f"Message 'type' must contain one of {list(VALID_TYPES)}")
