"""
Alerter service entry point.

Connects to Redis, starts the dispatch engine, bridges the checkers'
pub/sub channel onto the engine's inbound queue, and exposes health and
metrics endpoints.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import structlog
import uvicorn
from fastapi import FastAPI
from prometheus_client import make_asgi_app
from pydantic import ValidationError

from volt_common.config import get_settings
from volt_common.dal import DalClient
from volt_common.logging import configure_logging
from volt_common.messaging.event_queue import EventQueueClient
from volt_common.messaging.redis_client import RedisClient
from volt_common.models import Message

from .dispatcher import Alerter
from .health import router as health_router

logger = structlog.get_logger()


def decode_message(raw: str | bytes) -> Message | None:
    """Deserialise a pub/sub payload into a :class:`Message`.

    Returns:
        The message, or ``None`` if the payload is not a valid message.
    """
    try:
        return Message.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning("message_decode_failed", error=str(exc))
        return None


async def pump_messages(pubsub: Any, queue: asyncio.Queue[Message]) -> None:
    """Forward every decodable pub/sub message onto *queue*.

    Runs until the pubsub connection closes or the task is cancelled.
    """
    async for item in pubsub.listen():
        if item["type"] != "message":
            continue
        msg = decode_message(item.get("data", ""))
        if msg is not None:
            await queue.put(msg)


def _pump_done(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("alerter_pump_failed", error=repr(exc))
    else:
        logger.warning("alerter_pump_stopped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle for the alerter service."""
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json, service="alerter")
    logger.info("alerter_service_starting", member_id=settings.member_id)

    redis = RedisClient(settings.redis_url)
    await redis.connect()
    queue: asyncio.Queue[Message] = asyncio.Queue()
    alerter = Alerter(
        DalClient(redis, prefix=settings.alerter_config_prefix),
        EventQueueClient(
            redis,
            settings.member_id,
            stream=settings.event_queue_stream,
            maxlen=settings.event_queue_maxlen,
        ),
        queue,
        settings=settings,
    )
    alerter.start()
    app.state.alerter = alerter

    pubsub = await redis.subscribe(settings.inbound_channel)
    pump = asyncio.create_task(pump_messages(pubsub, queue), name="alerter-pump")
    pump.add_done_callback(_pump_done)
    app.state.pump = pump

    yield

    logger.info("alerter_service_stopping", in_flight=alerter.in_flight)
    try:
        pump.cancel()
        try:
            await pump
        except asyncio.CancelledError:
            pass
        except Exception as exc:  # noqa: BLE001
            logger.warning("alerter_pump_error_on_shutdown", error=repr(exc))
    finally:
        try:
            await alerter.stop()
            await alerter.close()
        finally:
            await redis.close()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(title="Alerter Service", lifespan=lifespan)
    app.include_router(health_router)
    app.mount("/metrics", make_asgi_app())
    return app


app = create_app()

if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        "alerter.main:app",
        host=_settings.api_host,
        port=_settings.api_port,
        reload=False,
    )
