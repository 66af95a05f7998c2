"""Prometheus metrics for the alerter service."""

from __future__ import annotations

from prometheus_client import Counter, Gauge

messages_received_total = Counter(
    "alerter_messages_received_total",
    "Alert messages taken off the inbound queue",
)
messages_rejected_total = Counter(
    "alerter_messages_rejected_total",
    "Alert messages that failed structural validation",
)
alerts_sent_total = Counter(
    "alerter_alerts_sent_total",
    "Alerts successfully delivered, per notifier",
    ["notifier"],
)
key_errors_total = Counter(
    "alerter_key_errors_total",
    "Per-key dispatch failures, by error kind",
    ["kind"],
)
in_flight_messages = Gauge(
    "alerter_in_flight_messages",
    "Message handlers currently running",
)
