"""Cross-domain event contract for order record writes.

The order store's change feed publishes one OrderWritten event per create,
update or delete of an order document. ``previous`` and ``current`` carry
the JSON-encoded document before and after the write; an absent
``previous`` means the order was created, an absent ``current`` means it
was deleted. Registered in the Alerts domain via
``register_external_event()`` with a matching ``__type__`` string.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, Text


class OrderWritten(BaseEvent):
    """An order document was created, updated or deleted."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous = Text()  # JSON document, absent on create
    current = Text()  # JSON document, absent on delete
    written_at = DateTime()
