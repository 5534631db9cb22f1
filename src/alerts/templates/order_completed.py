"""Order completed template."""

from alerts.order.intent import IntentKind


class OrderCompletedTemplate:
    intent_kind = IntentKind.COMPLETED

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number") or "N/A"
        customer_name = context.get("customer_name") or "N/A"
        return {
            "title": "✅ Order Completed",
            "body": f"Order {order_number} for {customer_name} is now complete!",
        }
