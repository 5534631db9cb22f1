"""Multicast dispatcher — fans a notification intent out to a snapshot of device tokens."""

import structlog
from alerts.channel import get_transport
from alerts.channel.push_port import PushPort
from alerts.config import get_settings
from alerts.delivery.outcome import DispatchReport, outcome_from_result
from alerts.errors import TransportInvocationError
from alerts.order.intent import NotificationIntent

logger = structlog.get_logger(__name__)


def _chunks(tokens: list[str], size: int):
    for start in range(0, len(tokens), size):
        yield tokens[start : start + size]


class MulticastDispatcher:
    """Delivers one intent to many tokens and reports per-token outcomes.

    Per-token failures are captured in the report and never abort the batch.
    Only a failure to issue the request itself raises ``TransportInvocationError``.
    """

    def __init__(self, transport: PushPort | None = None, batch_size: int | None = None):
        self.transport = transport or get_transport()
        self.batch_size = batch_size or get_settings().multicast_batch_size

    def dispatch(self, intent: NotificationIntent, tokens) -> DispatchReport:
        if not intent.is_deliverable:
            raise ValueError("Cannot dispatch an intent of kind None")

        tokens = list(tokens)
        if not tokens:
            return DispatchReport()

        outcomes = []
        for chunk in _chunks(tokens, self.batch_size):
            try:
                results = self._send(intent, chunk)
            except TransportInvocationError as exc:
                exc.outcomes = tuple(outcomes)
                logger.error(
                    "Multicast request failed",
                    order_id=intent.payload.get("orderId"),
                    delivered_before_failure=len(outcomes),
                    tokens=len(tokens),
                    error=str(exc),
                )
                raise
            outcomes.extend(zip(chunk, (outcome_from_result(result) for result in results), strict=True))

        report = DispatchReport.from_outcomes(outcomes)
        logger.info(
            "Multicast dispatched",
            order_id=intent.payload.get("orderId"),
            intent_type=intent.payload.get("type"),
            tokens=len(tokens),
            success_count=report.success_count,
            failure_count=report.failure_count,
        )
        return report

    def _send(self, intent: NotificationIntent, chunk: list[str]) -> list[dict]:
        try:
            results = self.transport.send_multicast(
                title=intent.title or "",
                body=intent.body or "",
                data=dict(intent.payload or {}),
                tokens=list(chunk),
            )
        except TransportInvocationError:
            raise
        except Exception as exc:
            raise TransportInvocationError(f"Multicast request failed: {exc}") from exc

        if results is None or len(results) != len(chunk):
            raise TransportInvocationError(
                f"Transport returned {0 if results is None else len(results)} results for {len(chunk)} tokens"
            )
        return list(results)
