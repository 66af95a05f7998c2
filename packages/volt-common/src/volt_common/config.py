"""
Environment-based configuration management for the alert pipeline.

Uses pydantic-settings to load configuration values from environment
variables and .env files. Both the alerter service and alert producers
read their settings from this module.

All environment variables are prefixed with ``VOLT_`` to avoid collisions.
"""

from __future__ import annotations

import socket
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from ``VOLT_``-prefixed environment variables.

    Attributes:
        member_id: Identity of this cluster member, stamped on event-queue entries.
        redis_url: Redis connection URL (config store, event queue, pub/sub).
        alerter_config_prefix: Key prefix under which alerter configs are stored.
        event_queue_stream: Redis Stream receiving error/info events.
        event_queue_maxlen: Approximate maximum length of the event stream.
        inbound_channel: Pub/sub channel that checkers publish alert messages to.
        notifier_timeout_s: Per-call timeout applied by every notifier backend.
        slack_bot_token: Default Slack bot OAuth token.
        pagerduty_events_url: PagerDuty Events API v2 endpoint.
        smtp_host: SMTP relay host for email alerts.
        smtp_port: SMTP relay port.
        smtp_username: SMTP login (empty = no auth).
        smtp_password: SMTP password.
        smtp_use_tls: Issue STARTTLS before sending.
        email_from: Default sender address for email alerts.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Render log lines as JSON instead of console format.
        api_host: Bind address for the health/metrics endpoint.
        api_port: Bind port for the health/metrics endpoint.
    """

    model_config = SettingsConfigDict(
        env_prefix="VOLT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    member_id: str = Field(
        default_factory=socket.gethostname,
        description="Identity of this cluster member.",
    )

    # ── Redis ──
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL.",
    )
    alerter_config_prefix: str = Field(
        default="volt:alerter:",
        description="Key prefix for per-key alerter configs.",
    )
    event_queue_stream: str = Field(
        default="volt:events",
        description="Redis Stream that receives event-queue entries.",
    )
    event_queue_maxlen: int = Field(
        default=10_000,
        ge=1,
        description="Approximate maximum length of the event stream.",
    )
    inbound_channel: str = Field(
        default="volt:alerts",
        description="Pub/sub channel carrying alert messages from checkers.",
    )

    # ── Notifiers ──
    notifier_timeout_s: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for every notifier backend call.",
    )
    slack_bot_token: str = Field(default="", description="Default Slack bot OAuth token.")
    pagerduty_events_url: str = Field(
        default="https://events.pagerduty.com/v2/enqueue",
        description="PagerDuty Events API v2 endpoint.",
    )
    smtp_host: str = Field(default="localhost", description="SMTP relay host.")
    smtp_port: int = Field(default=25, ge=1, le=65535, description="SMTP relay port.")
    smtp_username: str = Field(default="", description="SMTP login.")
    smtp_password: str = Field(default="", description="SMTP password.")
    smtp_use_tls: bool = Field(default=False, description="Issue STARTTLS before sending.")
    email_from: str = Field(default="alerter@localhost", description="Default sender address.")

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Logging level.")
    log_json: bool = Field(default=True, description="Render logs as JSON.")

    # ── API ──
    api_host: str = Field(default="0.0.0.0", description="Health endpoint bind address.")
    api_port: int = Field(default=8080, ge=1, le=65535, description="Health endpoint bind port.")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()
