"""Shared fixtures for alerter service tests."""

from __future__ import annotations

import asyncio
import json
import os
from typing import Any
from unittest.mock import AsyncMock

import pytest

from volt_common.dal import DalClient, KeyNotFoundError
from volt_common.messaging.event_queue import EventQueueClient
from volt_common.models import AlerterConfig, Message

from alerter.dispatcher import Alerter
from alerter.notifiers.base import Notifier
from alerter.errors import SendError

# Set env vars before any settings are read.
os.environ.setdefault("VOLT_REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("VOLT_MEMBER_ID", "test-member")


class FakeNotifier(Notifier):
    """In-memory notifier recording every send.

    Args:
        name: Type name to register under.
        required: Options that ``validate_config`` insists on.
        send_error: Exception raised from ``send`` (after the gate opens).
        gate: If set, ``send`` waits on it before completing.
    """

    def __init__(
        self,
        name: str,
        *,
        required: tuple[str, ...] = (),
        send_error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.name = name
        self.required = required
        self.send_error = send_error
        self.gate = gate
        self.sent: list[tuple[Message, AlerterConfig]] = []
        self.validated: list[AlerterConfig] = []
        self.delivered = asyncio.Event()

    def validate_config(self, config: AlerterConfig) -> None:
        self.validated.append(config)
        self._require(config, *self.required)

    async def send(self, msg: Message, config: AlerterConfig) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((msg, config))
        self.delivered.set()


def make_dal(configs: dict[str, Any]) -> AsyncMock:
    """DAL mock serving *configs*; dict values are JSON-encoded, strings pass through."""

    async def _fetch(key: str) -> str:
        if key not in configs:
            raise KeyNotFoundError(f"No alerter config found at 'volt:alerter:{key}'")
        value = configs[key]
        return value if isinstance(value, str) else json.dumps(value)

    dal = AsyncMock(spec=DalClient)
    dal.fetch_alerter_config = AsyncMock(side_effect=_fetch)
    return dal


# ─── Fixtures ────────────────────────────────────────────────────


@pytest.fixture()
def event_queue() -> AsyncMock:
    """Async mock standing in for the cluster event queue."""
    eq = AsyncMock(spec=EventQueueClient)
    eq.add = AsyncMock(return_value="1-0")
    eq.add_with_error_log = AsyncMock(return_value="1-0")
    return eq


@pytest.fixture()
def sample_message() -> Message:
    msg = Message(
        type="critical",
        keys=["svc-a"],
        title="HTTP check failed",
        text="GET / returned 503",
        source="checker1",
        count=3,
        contents={"host": "h1"},
    )
    msg.tag()
    return msg


@pytest.fixture()
async def alerter_factory(event_queue: AsyncMock):
    """Build started alerters over fake notifiers and an in-memory config store."""
    created: list[Alerter] = []

    def _make(notifiers: list[Notifier], configs: dict[str, Any]) -> Alerter:
        alerter = Alerter(
            make_dal(configs),
            event_queue,
            asyncio.Queue(),
            notifiers=notifiers,
        )
        alerter.start()
        created.append(alerter)
        return alerter

    yield _make

    for alerter in created:
        await alerter.stop()


@pytest.fixture()
def failing_send() -> SendError:
    return SendError("backend unavailable")


@pytest.fixture()
def fake_notifier() -> type[FakeNotifier]:
    """The :class:`FakeNotifier` class, for building notifiers inside tests."""
    return FakeNotifier


@pytest.fixture()
def dal_factory():
    return make_dal
