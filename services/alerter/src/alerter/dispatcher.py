"""
Central alert dispatch engine.

Consumes alert messages produced by health checkers and fans each one out
to the notifiers configured for its alerter keys.

Flow
----
1. A single consumer task awaits the inbound ``asyncio.Queue``.
2. Every message is tagged with a fresh correlation id and handed to its
   own task; the consumer never waits for a handler to finish.
3. The handler validates the message, then for each key in order:
   load config → validate config with the matching notifier → send.
   A failing key is recorded and the next key is still attempted.
4. The handler emits exactly one report: an aggregated error entry on the
   event queue if any key failed, otherwise a debug success trace.

There is no bound on concurrently running handlers and no backpressure; a
burst of messages produces a matching burst of tasks. Nothing is retried,
and in-flight handlers are not cancelled or awaited on shutdown.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from types import MappingProxyType

import structlog

from volt_common.config import Settings, get_settings
from volt_common.dal import DalClient
from volt_common.messaging.event_queue import EventQueueClient
from volt_common.models import Message

from . import metrics
from .errors import (
    AlerterError,
    ConfigValidationError,
    DispatchOutcome,
    KeyFailure,
    MessageValidationError,
    SendError,
)
from .notifiers.base import Notifier
from .notifiers.registry import build_registry, default_notifiers
from .resolver import ConfigResolver
from .validation import validate_message

logger = structlog.get_logger()


class Alerter:
    """Consume alert messages and dispatch them to notifier backends.

    Args:
        dal: Config store client used to resolve alerter keys.
        event_queue: Sink for aggregated error reports.
        message_queue: Inbound channel of messages from checkers.
        notifiers: Notifier instances to register; defaults to the built-in
                   PagerDuty, Slack and email notifiers.
        settings: Service settings (used to build the default notifiers).
    """

    identifier: str = "alerter"

    def __init__(
        self,
        dal: DalClient,
        event_queue: EventQueueClient,
        message_queue: asyncio.Queue[Message],
        *,
        notifiers: Sequence[Notifier] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._dal = dal
        self._event_queue = event_queue
        self._queue = message_queue
        self._notifier_list = notifiers
        self._settings = settings
        self._notifiers: Mapping[str, Notifier] = MappingProxyType({})
        self._resolver: ConfigResolver | None = None
        self._consumer: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[DispatchOutcome]] = set()

    # ── lifecycle ──

    @property
    def notifiers(self) -> Mapping[str, Notifier]:
        """Read-only registry of notifier type name → notifier."""
        return self._notifiers

    @property
    def running(self) -> bool:
        return self._consumer is not None and not self._consumer.done()

    @property
    def in_flight(self) -> int:
        """Number of message handlers that have not finished yet."""
        return len(self._in_flight)

    def start(self) -> None:
        """Build the notifier registry and launch the consumer loop.

        Returns as soon as the consumer task is scheduled. Must be called
        from within a running event loop.

        Raises:
            RuntimeError: If the alerter is already running.
        """
        if self.running:
            raise RuntimeError("Alerter is already running")

        logger.info("alerter_starting", identifier=self.identifier)
        notifiers = self._notifier_list
        if notifiers is None:
            notifiers = default_notifiers(self._settings or get_settings())
        self._notifiers = build_registry(notifiers)
        self._resolver = ConfigResolver(self._dal, self._notifiers)
        self._consumer = asyncio.create_task(self._run(), name="alerter-consumer")

    async def stop(self) -> None:
        """Stop taking messages off the queue.

        In-flight handlers keep running; they are neither awaited nor
        cancelled.
        """
        if self._consumer is None:
            return
        self._consumer.cancel()
        try:
            await self._consumer
        except asyncio.CancelledError:
            pass
        self._consumer = None
        logger.info("alerter_stopped", in_flight=self.in_flight)

    async def close(self) -> None:
        """Release resources held by the registered notifiers."""
        for notifier in self._notifiers.values():
            await notifier.close()

    async def wait_idle(self) -> None:
        """Wait until the queue is drained and every handler has finished."""
        await self._queue.join()
        while self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)

    # ── consumer loop ──

    async def _run(self) -> None:
        while True:
            msg = await self._queue.get()
            try:
                msg.tag()
                metrics.messages_received_total.inc()
                logger.debug(
                    "message_received",
                    correlation_id=msg.correlation_id,
                    source=msg.source,
                    keys=msg.keys,
                )
                task = asyncio.create_task(self.handle_message(msg))
                self._in_flight.add(task)
                metrics.in_flight_messages.inc()
                task.add_done_callback(self._handler_done)
            finally:
                self._queue.task_done()

    def _handler_done(self, task: asyncio.Task[DispatchOutcome]) -> None:
        self._in_flight.discard(task)
        metrics.in_flight_messages.dec()

    # ── per-message handling ──

    async def handle_message(self, msg: Message) -> DispatchOutcome:
        """Validate *msg*, dispatch every key and report the outcome once.

        Returns:
            The :class:`DispatchOutcome`, including structured per-key failures.
        """
        outcome = DispatchOutcome(
            correlation_id=msg.correlation_id,
            source=msg.source,
            keys=list(msg.keys),
        )
        log = logger.bind(correlation_id=msg.correlation_id, source=msg.source)

        try:
            validate_message(msg)
        except MessageValidationError as exc:
            outcome.rejected = str(exc)
            metrics.messages_rejected_total.inc()
            await self._event_queue.add_with_error_log("error", outcome.render(self.identifier))
            return outcome

        for key in msg.keys:
            try:
                await self._dispatch_key(key, msg)
            except AlerterError as exc:
                failure = KeyFailure.from_error(key, msg.correlation_id, exc)
                outcome.failures.append(failure)
                metrics.key_errors_total.labels(kind=failure.kind).inc()
                log.error("alert_key_failed", key=key, kind=failure.kind, error=failure.detail)

        if outcome.failures:
            await self._event_queue.add_with_error_log("error", outcome.render(self.identifier))
        else:
            log.debug(
                "alert_send_complete",
                delivered=outcome.delivered,
                keys=outcome.keys,
                report=outcome.render(self.identifier),
            )
        return outcome

    async def _dispatch_key(self, key: str, msg: Message) -> None:
        """Resolve, validate and send for one alerter key.

        Raises:
            AlerterError: Any key-scoped failure.
        """
        if self._resolver is None:
            raise RuntimeError("Alerter has not been started")

        config = await self._resolver.load_alerter_config(key, msg)
        notifier = self._notifiers[config.type]

        try:
            notifier.validate_config(config)
        except ConfigValidationError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ConfigValidationError(str(exc)) from exc

        logger.debug(
            "alert_sending",
            correlation_id=msg.correlation_id,
            key=key,
            notifier=config.type,
        )
        try:
            await notifier.send(msg, config)
        except SendError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise SendError(str(exc)) from exc
        metrics.alerts_sent_total.labels(notifier=config.type).inc()
