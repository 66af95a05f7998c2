"""
Shared Pydantic data models for the alert pipeline.

Contains the checker → alerter message and the per-key alerter
configuration record.
"""

from volt_common.models.alerter_config import AlerterConfig
from volt_common.models.message import Message, MessageType

__all__ = [
    "AlerterConfig",
    "Message",
    "MessageType",
]
