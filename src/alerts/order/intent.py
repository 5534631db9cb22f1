"""Notification intents — what (if anything) staff devices should be told about an order write."""

from enum import Enum

from alerts.domain import alerts
from protean.fields import Dict, String, Text


class IntentKind(Enum):
    NEW_ORDER = "NewOrder"
    RECEIVED = "Received"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    NONE = "None"


# Machine-readable tag carried in the push payload as ``type``
TYPE_TAGS = {
    IntentKind.NEW_ORDER: "new_order",
    IntentKind.RECEIVED: "order_received",
    IntentKind.COMPLETED: "order_completed",
    IntentKind.CANCELLED: "order_cancelled",
}


@alerts.value_object
class NotificationIntent:
    """A rendered notification ready for multicast, or the "do not deliver" intent.

    The payload always carries ``orderId``, ``orderNumber`` and ``type`` for
    deliverable intents; every value is a string so it can travel as FCM data.
    """

    kind: String(choices=IntentKind, required=True)
    title: String(max_length=200)
    body: Text()
    payload: Dict()

    @classmethod
    def none(cls):
        return cls(kind=IntentKind.NONE.value)

    @classmethod
    def build(cls, kind: IntentKind, title: str, body: str, order_id, order_number):
        return cls(
            kind=kind.value,
            title=title,
            body=body,
            payload={
                "orderId": "" if order_id is None else str(order_id),
                "orderNumber": "" if order_number is None else str(order_number),
                "type": TYPE_TAGS[kind],
            },
        )

    @property
    def is_deliverable(self) -> bool:
        return IntentKind(self.kind) != IntentKind.NONE
