"""Error taxonomy for order alert delivery.

Per-token errors (``TransientDeliveryError``, ``PermanentTokenError``,
``UnclassifiedError``) may be raised by a push transport for a single probe;
callers convert them into ``DeliveryOutcome`` values and never let them abort
a batch. The remaining errors describe whole-operation failures and are
propagated to the invoking trigger so its retry policy can apply.
"""


class AlertsError(Exception):
    """Base class for all Alerts domain errors."""


# ---------------------------------------------------------------------------
# Per-token delivery errors
# ---------------------------------------------------------------------------
class DeliveryError(AlertsError):
    """Delivery to a single device token failed."""

    def __init__(self, token: str, code: str | None = None, message: str | None = None):
        self.token = token
        self.code = code
        super().__init__(message or f"Delivery to token failed ({code or 'no code'})")


class TransientDeliveryError(DeliveryError):
    """The token is temporarily unreachable. The registry is left untouched."""


class PermanentTokenError(DeliveryError):
    """The token is no longer deliverable (app uninstalled or unregistered)."""


class UnclassifiedError(DeliveryError):
    """The transport reported something unrecognised. Never grounds for pruning."""


# ---------------------------------------------------------------------------
# Whole-operation errors
# ---------------------------------------------------------------------------
class TransportInvocationError(AlertsError):
    """The push transport could not even issue the request.

    ``outcomes`` holds the per-token outcomes of chunks delivered before the
    failing request, in token order. They are reported, not pruned: the
    error rolls back the handler's unit of work, and the next liveness
    sweep catches any dead token among them.
    """

    def __init__(self, message: str, outcomes=()):
        self.outcomes = tuple(outcomes)
        super().__init__(message)


class RegistryWriteError(AlertsError):
    """A pruning batch could not be written to the device registry."""


class DispatchTimeoutError(AlertsError):
    """Handling an order write exceeded its time budget."""


class SweepTimeoutError(AlertsError):
    """The liveness sweep exceeded its deadline before all probes completed."""

    def __init__(self, message: str, unprobed: int = 0, permanently_invalid: int = 0):
        self.unprobed = unprobed
        self.permanently_invalid = permanently_invalid
        super().__init__(message)
