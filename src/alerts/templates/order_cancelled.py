"""Order cancelled template."""

from alerts.order.intent import IntentKind


class OrderCancelledTemplate:
    intent_kind = IntentKind.CANCELLED

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number") or "N/A"
        return {
            "title": "❌ Order Cancelled",
            "body": f"Order {order_number} has been cancelled",
        }
