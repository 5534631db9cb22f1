"""Per-token delivery outcomes and the transport error-code mapping.

Per-token failures are values, not exceptions: the dispatcher and the sweeper
collect one ``DeliveryOutcome`` per token and leave the decision to remove
anything to the pruner.
"""

from dataclasses import dataclass, field
from enum import Enum

from alerts.errors import PermanentTokenError, TransientDeliveryError


class ErrorKind(Enum):
    PERMANENTLY_INVALID = "PermanentlyInvalid"
    TRANSIENT = "Transient"
    UNKNOWN = "Unknown"


# FCM reports codes with a "messaging/" prefix from the Admin SDK and bare
# upper-case codes from the HTTP v1 API; both are normalised before lookup.
_PERMANENT_CODES = {
    "registration-token-not-registered",
    "invalid-registration-token",
    "unregistered",
}

_TRANSIENT_CODES = {
    "quota-exceeded",
    "message-rate-exceeded",
    "device-message-rate-exceeded",
    "server-unavailable",
    "unavailable",
    "internal-error",
    "internal",
    "timeout",
    "deadline-exceeded",
    "probe-timeout",
}


def _normalize_code(code: str) -> str:
    normalized = code.strip().lower()
    if "/" in normalized:
        normalized = normalized.rsplit("/", 1)[1]
    return normalized.replace("_", "-")


def classify_error_code(code: str | None) -> ErrorKind:
    """Map a transport error code onto an ErrorKind."""
    if not code:
        return ErrorKind.UNKNOWN
    normalized = _normalize_code(code)
    if normalized in _PERMANENT_CODES:
        return ErrorKind.PERMANENTLY_INVALID
    if normalized in _TRANSIENT_CODES:
        return ErrorKind.TRANSIENT
    return ErrorKind.UNKNOWN


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of delivering to a single token."""

    success: bool
    error_kind: ErrorKind | None = None
    error_code: str | None = None
    message_id: str | None = None

    @property
    def is_permanently_invalid(self) -> bool:
        return self.error_kind == ErrorKind.PERMANENTLY_INVALID

    @classmethod
    def delivered(cls, message_id=None):
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(cls, error_code=None, error_kind=None):
        return cls(
            success=False,
            error_kind=error_kind or classify_error_code(error_code),
            error_code=error_code,
        )


def outcome_from_result(result: dict) -> DeliveryOutcome:
    """Convert a transport result dict into a DeliveryOutcome."""
    if result.get("status") == "sent":
        return DeliveryOutcome.delivered(message_id=result.get("message_id"))
    return DeliveryOutcome.failed(error_code=result.get("error"))


def outcome_from_exception(exc: Exception) -> DeliveryOutcome:
    """Convert an exception raised for a single token into a DeliveryOutcome.

    Anything that is not an explicit permanent error counts as transient.
    """
    code = getattr(exc, "code", None)
    if isinstance(exc, PermanentTokenError):
        return DeliveryOutcome.failed(error_code=code, error_kind=ErrorKind.PERMANENTLY_INVALID)
    if isinstance(exc, TransientDeliveryError):
        return DeliveryOutcome.failed(error_code=code, error_kind=ErrorKind.TRANSIENT)
    return DeliveryOutcome.failed(error_code=code or type(exc).__name__, error_kind=ErrorKind.TRANSIENT)


@dataclass(frozen=True)
class DispatchReport:
    """Aggregate result of one multicast dispatch, outcomes in token order."""

    success_count: int = 0
    failure_count: int = 0
    outcomes: tuple[tuple[str, DeliveryOutcome], ...] = field(default_factory=tuple)

    @classmethod
    def from_outcomes(cls, outcomes):
        outcomes = tuple(outcomes)
        successes = sum(1 for _, outcome in outcomes if outcome.success)
        return cls(
            success_count=successes,
            failure_count=len(outcomes) - successes,
            outcomes=outcomes,
        )

    @property
    def permanently_invalid_tokens(self) -> list[str]:
        return [token for token, outcome in self.outcomes if outcome.is_permanently_invalid]


@dataclass(frozen=True)
class SweepReport:
    """Result of one liveness sweep."""

    probed: int = 0
    removed: int = 0
    timed_out: int = 0
    outcomes: tuple[tuple[str, DeliveryOutcome], ...] = field(default_factory=tuple)
