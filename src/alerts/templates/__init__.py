"""Template registry — maps IntentKind to template classes.

Each template renders a push title and body from an order snapshot context.
"""

from alerts.order.intent import IntentKind
from alerts.templates.new_order import NewOrderTemplate
from alerts.templates.order_cancelled import OrderCancelledTemplate
from alerts.templates.order_completed import OrderCompletedTemplate
from alerts.templates.order_received import OrderReceivedTemplate

TEMPLATE_REGISTRY: dict[IntentKind, type] = {
    template.intent_kind: template
    for template in (
        NewOrderTemplate,
        OrderReceivedTemplate,
        OrderCompletedTemplate,
        OrderCancelledTemplate,
    )
}


def get_template(kind: IntentKind):
    """Look up a template class by intent kind."""
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for intent kind: {kind.value}")
    return template_cls
