"""
Per-key alerter config resolution.

Fetches the stored JSON for an alerter key, decodes it into an
:class:`AlerterConfig` and checks that a notifier of the named type is
registered. Configs are fetched fresh for every key of every message.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from volt_common.dal import DalClient, DalError
from volt_common.models import AlerterConfig, Message

from .errors import DecodeError, FetchError, UnknownTypeError

if TYPE_CHECKING:
    from .notifiers.base import Notifier

logger = structlog.get_logger()


class ConfigResolver:
    """Turn alerter keys into validated-type :class:`AlerterConfig` objects.

    Args:
        dal: Config store client.
        notifiers: Read-only registry of notifier type name → notifier.
    """

    def __init__(self, dal: DalClient, notifiers: Mapping[str, Notifier]) -> None:
        self._dal = dal
        self._notifiers = notifiers

    async def load_alerter_config(self, key: str, msg: Message) -> AlerterConfig:
        """Fetch and decode the config for *key*.

        Raises:
            FetchError: Store unreachable or no record for *key*.
            DecodeError: Stored payload is not a valid alerter config.
            UnknownTypeError: No notifier registered for the config's type.
        """
        log = logger.bind(correlation_id=msg.correlation_id, key=key)

        try:
            raw = await self._dal.fetch_alerter_config(key)
        except DalError as exc:
            log.error("alerter_config_fetch_failed", error=str(exc))
            raise FetchError(str(exc)) from exc

        try:
            config = AlerterConfig.model_validate_json(raw)
        except ValidationError as exc:
            log.error("alerter_config_decode_failed", error=str(exc))
            raise DecodeError(f"Malformed alerter config for key '{key}': {exc}") from exc

        if config.type not in self._notifiers:
            log.error("alerter_type_unknown", alerter_type=config.type)
            raise UnknownTypeError(f"Unable to find any alerter named '{config.type}'")

        return config
