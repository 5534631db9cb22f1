"""Alerts bounded context — Staff device notifications for order lifecycle changes.

Consumes order write events from the order store's change feed, classifies
each transition, and pushes a multicast notification to every registered
staff device. Keeps the device registry clean by pruning tokens the push
transport reports as permanently invalid, both after deliveries and during
a scheduled liveness sweep.
"""

import structlog
from protean.domain import Domain

alerts = Domain(name="alerts")

logger = structlog.get_logger(__name__)
