"""
Abstract base class for notifier backends.

Defines the Notifier interface that every backend (PagerDuty, Slack,
email, ...) implements, so the alerter can fan out to them by type name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from volt_common.models import AlerterConfig, Message

from ..errors import ConfigValidationError


class Notifier(ABC):
    """Base class every notifier backend must implement.

    Subclasses set :attr:`name` and override :meth:`validate_config` and
    :meth:`send`. Instances are shared by all in-flight messages, so they
    must not keep per-message state.

    Attributes:
        name: Type name matched against ``AlerterConfig.type``.
    """

    name: str = "base"

    def identify(self) -> str:
        """Return the type name this notifier is registered under."""
        return self.name

    @abstractmethod
    def validate_config(self, config: AlerterConfig) -> None:
        """Check the backend-specific options of *config*.

        Must be side-effect free.

        Raises:
            ConfigValidationError: If a required option is missing or invalid.
        """

    @abstractmethod
    async def send(self, msg: Message, config: AlerterConfig) -> None:
        """Deliver *msg* using *config*.

        Implementations bound every network call with a timeout.

        Raises:
            SendError: On any transport or delivery failure.
        """

    async def close(self) -> None:
        """Release any resources held by the notifier (override if needed)."""

    def _require(self, config: AlerterConfig, *options: str) -> None:
        """Raise unless every option in *options* is present and non-empty."""
        missing = [opt for opt in options if not config.options.get(opt)]
        if missing:
            raise ConfigValidationError(
                f"{self.name} config is missing required option(s): {', '.join(missing)}"
            )
