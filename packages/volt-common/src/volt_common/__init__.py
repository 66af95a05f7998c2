"""
volt-common: Shared library for the alert pipeline.

Provides configuration management, structured logging, data models, the
Redis client wrapper, the config-store DAL, and the event queue client
used by checkers and the alerter service.
"""

from volt_common.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
