"""Order write handling — classify, dispatch to the registry snapshot, prune.

``OrderWriteNotifier`` is the explicit handler for one change-feed event. It
takes a typed ``OrderTransition`` and has every collaborator injected so
tests can substitute fakes.
"""

import time
from dataclasses import dataclass

import structlog
from alerts.config import AlertSettings, get_settings
from alerts.delivery.dispatcher import MulticastDispatcher
from alerts.delivery.pruner import RegistryPruner
from alerts.device.device import DeviceRegistration
from alerts.order.classifier import classify
from alerts.order.intent import IntentKind
from alerts.order.state import OrderTransition
from alerts.utils.deadline import run_with_timeout
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderWriteResult:
    """Outcome reported back to the invoking trigger."""

    order_id: str
    intent_kind: str
    dispatched: bool = False
    success: bool = True
    success_count: int = 0
    failure_count: int = 0
    removed_count: int = 0


class OrderWriteNotifier:
    def __init__(
        self,
        registry=None,
        dispatcher: MulticastDispatcher | None = None,
        pruner: RegistryPruner | None = None,
        settings: AlertSettings | None = None,
    ):
        settings = settings or get_settings()
        self.registry = registry if registry is not None else current_domain.repository_for(DeviceRegistration)
        self.dispatcher = dispatcher or MulticastDispatcher()
        self.pruner = pruner or RegistryPruner(self.registry)
        self.timeout = settings.dispatch_timeout_seconds

    def handle(self, transition: OrderTransition) -> OrderWriteResult:
        started = time.monotonic()
        order_id = transition.order_id

        try:
            if transition.is_deletion:
                logger.info("Order was deleted, no notification", order_id=order_id)
                return OrderWriteResult(order_id=order_id, intent_kind=IntentKind.NONE.value)

            intent = classify(transition.previous, transition.current)
            if not intent.is_deliverable:
                logger.info(
                    "Order updated, no notification needed",
                    order_id=order_id,
                    previous_status=transition.previous.status if transition.previous else None,
                    current_status=transition.current.status,
                )
                return OrderWriteResult(order_id=order_id, intent_kind=intent.kind)

            tokens = self.registry.list_tokens()
            if not tokens:
                logger.info("No device tokens registered", order_id=order_id, intent_kind=intent.kind)
                return OrderWriteResult(order_id=order_id, intent_kind=intent.kind)

            logger.info("Sending order notification", order_id=order_id, intent_kind=intent.kind, devices=len(tokens))

            remaining = self.timeout - (time.monotonic() - started)
            report = run_with_timeout(self.dispatcher.dispatch, remaining, intent, tokens)
            removed = self.pruner.prune(report.outcomes)
        except Exception as exc:
            logger.error("Error handling order write", order_id=order_id, error=str(exc))
            raise

        return OrderWriteResult(
            order_id=order_id,
            intent_kind=intent.kind,
            dispatched=True,
            success=True,
            success_count=report.success_count,
            failure_count=report.failure_count,
            removed_count=removed,
        )
