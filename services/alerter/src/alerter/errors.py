"""
Error taxonomy and per-message outcome types for the alerter.

A :class:`MessageValidationError` rejects a whole message before any key is
touched. Every other :class:`AlerterError` is scoped to a single alerter key:
it is recorded as a :class:`KeyFailure` and never stops the remaining keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class AlerterError(Exception):
    """Base class for alerter failures.

    Attributes:
        kind: Short machine-readable label (used in logs and metrics).
        summary: Phrase that prefixes the rendered error entry.
    """

    kind: str = "error"
    summary: str = "Alerter failure"


class MessageValidationError(AlerterError):
    """The message is structurally invalid; no key is dispatched."""

    kind = "validation"
    summary = "Unable to validate message"


class FetchError(AlerterError):
    """The config store is unreachable or has no record for the key."""

    kind = "fetch"
    summary = "Unable to load alerter key"


class DecodeError(AlerterError):
    """The stored config payload is not a valid alerter config."""

    kind = "decode"
    summary = "Unable to load alerter key"


class UnknownTypeError(AlerterError):
    """The config names a notifier type that is not registered."""

    kind = "unknown_type"
    summary = "Unable to load alerter key"


class ConfigValidationError(AlerterError):
    """The notifier rejected the config's options."""

    kind = "config_validation"
    summary = "Unable to validate alerter config"


class SendError(AlerterError):
    """The notifier backend failed to deliver the alert."""

    kind = "send"
    summary = "Unable to complete message send"


@dataclass(frozen=True, slots=True)
class KeyFailure:
    """A failure isolated to one alerter key."""

    key: str
    kind: str
    detail: str

    @classmethod
    def from_error(cls, key: str, correlation_id: str, exc: AlerterError) -> KeyFailure:
        return cls(
            key=key,
            kind=exc.kind,
            detail=f"{exc.summary} for {correlation_id}: {exc}",
        )


@dataclass(slots=True)
class DispatchOutcome:
    """Result of handling one message.

    ``rejected`` carries the validation reason when the message never
    reached per-key dispatch; ``failures`` holds one entry per failed key.
    """

    correlation_id: str
    source: str
    keys: list[str]
    failures: list[KeyFailure] = field(default_factory=list)
    rejected: str | None = None

    @property
    def ok(self) -> bool:
        return self.rejected is None and not self.failures

    @property
    def delivered(self) -> int:
        """Number of keys that were dispatched successfully."""
        if self.rejected is not None:
            return 0
        return len(self.keys) - len(self.failures)

    def render(self, identifier: str = "alerter") -> str:
        """Render the single free-text report for this outcome."""
        if self.rejected is not None:
            return (
                f"{identifier}: Unable to validate message "
                f"{self.correlation_id}: {self.rejected}"
            )
        if self.failures:
            return (
                f"{identifier}: Ran into {len(self.failures)} errors during alert send "
                f"for {self.source} (alerters: [{', '.join(self.keys)}]); "
                f"error list: {'; '.join(f.detail for f in self.failures)}"
            )
        return (
            f"{identifier}: Successfully sent {len(self.keys)} alert messages for "
            f"{self.correlation_id} (alerters: [{', '.join(self.keys)}])"
        )
