"""
Per-key alerter configuration model.

Stored as JSON in the config store under the alerter key, e.g.::

    {"type": "slack", "description": "ops room", "options": {"channel": "#ops"}}
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AlerterConfig(BaseModel):
    """Notifier selection plus backend-specific options for one alerter key.

    Attributes:
        type: Name of the notifier that handles this key.
        description: Free-form operator note.
        options: Backend-specific string options.
    """

    type: str = ""
    description: str = ""
    options: dict[str, str] = Field(default_factory=dict)
