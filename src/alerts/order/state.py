"""Order state snapshots as observed on the order store's change feed.

Orders are owned by the order-management client; this context only sees
before/after snapshots of each write. Status strings are kept verbatim and
compared case-insensitively.
"""

from dataclasses import dataclass
from enum import Enum

from protean.fields import Integer, Text

from alerts.domain import alerts


class OrderStatus(Enum):
    """Statuses with a defined meaning for staff alerts."""

    NOT_RECEIVED = "NotReceived"
    RECEIVED = "Received"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, raw):
        """Return the status matching ``raw`` case-insensitively, or None for other statuses."""
        if raw is None:
            return None
        lowered = str(raw).lower()
        for status in cls:
            if status.value.lower() == lowered:
                return status
        return None


# Change-feed documents use camelCase; snake_case is accepted for internal callers
_DOCUMENT_KEYS = {
    "order_number": ("orderNumber", "order_number"),
    "customer_name": ("customerName", "customer_name"),
    "item_count": ("itemCount", "item_count"),
    "status": ("status",),
}


def _lookup(document: dict, field_name: str):
    for key in _DOCUMENT_KEYS[field_name]:
        if key in document:
            return document[key]
    return None


def _coerce_count(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@alerts.value_object
class OrderState:
    """One snapshot of an order record.

    ``status`` holds the raw string written by the client. Statuses outside
    ``OrderStatus`` are "other" statuses and never trigger a status alert
    unless they read as completed or cancelled.
    """

    order_id: Text()
    order_number: Text()
    customer_name: Text()
    item_count: Integer()
    status: Text()

    @classmethod
    def from_document(cls, order_id, document: dict):
        """Build a snapshot from a change-feed document."""
        order_number = _lookup(document, "order_number")
        customer_name = _lookup(document, "customer_name")
        status = _lookup(document, "status")
        return cls(
            order_id=str(order_id) if order_id is not None else None,
            order_number=str(order_number) if order_number is not None else None,
            customer_name=str(customer_name) if customer_name is not None else None,
            item_count=_coerce_count(_lookup(document, "item_count")),
            status=str(status) if status is not None else None,
        )

    @property
    def normalized_status(self) -> str:
        return (self.status or "").lower()


@dataclass(frozen=True)
class OrderTransition:
    """The before/after pair for a single order write.

    ``previous`` is None when the order was created; ``current`` is None when
    it was deleted.
    """

    order_id: str
    previous: OrderState | None = None
    current: OrderState | None = None

    @property
    def is_creation(self) -> bool:
        return self.previous is None and self.current is not None

    @property
    def is_deletion(self) -> bool:
        return self.current is None

    @classmethod
    def from_documents(cls, order_id, previous: dict | None, current: dict | None):
        return cls(
            order_id=str(order_id),
            previous=OrderState.from_document(order_id, previous) if previous is not None else None,
            current=OrderState.from_document(order_id, current) if current is not None else None,
        )
