"""Inbound cross-domain event handler — Alerts reacts to order document writes.

Every create, update or delete on the order store arrives as an
OrderWritten event. The handler decodes the before/after documents into an
OrderTransition and hands it to the OrderWriteNotifier.
"""

import json

import structlog
from alerts.device.device import DeviceRegistration
from alerts.domain import alerts
from alerts.order.notifier import OrderWriteNotifier, OrderWriteResult
from alerts.order.state import OrderTransition
from protean.utils.mixins import handle
from shared.events.orders import OrderWritten

logger = structlog.get_logger(__name__)

alerts.register_external_event(OrderWritten, "Orders.OrderWritten.v1")


def _decode_document(raw):
    if raw is None or raw == "":
        return None
    if isinstance(raw, dict):
        return raw
    document = json.loads(raw)
    if document is not None and not isinstance(document, dict):
        raise ValueError(f"Order document must be a JSON object, got {type(document).__name__}")
    return document


def transition_from_event(event: OrderWritten) -> OrderTransition:
    """Decode an OrderWritten event into a typed transition."""
    return OrderTransition.from_documents(
        order_id=str(event.order_id),
        previous=_decode_document(event.previous),
        current=_decode_document(event.current),
    )


@alerts.event_handler(part_of=DeviceRegistration, stream_category="orders::order")
class OrderEventsHandler:
    """Pushes staff alerts for order creations and status changes."""

    @handle(OrderWritten)
    def on_order_written(self, event: OrderWritten) -> OrderWriteResult:
        transition = transition_from_event(event)
        return OrderWriteNotifier().handle(transition)
