"""Transition classifier — decides which staff alert, if any, an order write deserves.

Pure and total over every (previous, current) pair:

    current absent                       → None (deletion)
    previous absent                      → NewOrder
    NotReceived → Received               → Received
    anything → Completed                 → Completed
    anything → Cancelled                 → Cancelled
    unchanged status / other transitions → None

Statuses are compared case-insensitively. Other fields are used verbatim.
"""

from alerts.order.intent import IntentKind, NotificationIntent
from alerts.order.state import OrderState, OrderStatus
from alerts.templates import get_template

_NOT_RECEIVED = OrderStatus.NOT_RECEIVED.value.lower()
_RECEIVED = OrderStatus.RECEIVED.value.lower()
_COMPLETED = OrderStatus.COMPLETED.value.lower()
_CANCELLED = OrderStatus.CANCELLED.value.lower()


def _status_intent_kind(previous_status: str, current_status: str) -> IntentKind:
    if previous_status == current_status:
        return IntentKind.NONE
    if previous_status == _NOT_RECEIVED and current_status == _RECEIVED:
        return IntentKind.RECEIVED
    if current_status == _COMPLETED:
        return IntentKind.COMPLETED
    if current_status == _CANCELLED:
        return IntentKind.CANCELLED
    return IntentKind.NONE


def classify_kind(previous: OrderState | None, current: OrderState | None) -> IntentKind:
    """Return only the intent kind for a transition."""
    if current is None:
        return IntentKind.NONE
    if previous is None:
        return IntentKind.NEW_ORDER
    return _status_intent_kind(previous.normalized_status, current.normalized_status)


def classify(previous: OrderState | None, current: OrderState | None) -> NotificationIntent:
    """Turn an order transition into a notification intent."""
    kind = classify_kind(previous, current)
    if kind == IntentKind.NONE:
        return NotificationIntent.none()

    rendered = get_template(kind).render(
        {
            "order_number": current.order_number,
            "customer_name": current.customer_name,
            "item_count": current.item_count,
        }
    )
    return NotificationIntent.build(
        kind=kind,
        title=rendered["title"],
        body=rendered["body"],
        order_id=current.order_id,
        order_number=current.order_number,
    )
