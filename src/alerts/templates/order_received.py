"""Order received template — sent when a NotReceived order is marked Received."""

from alerts.order.intent import IntentKind


class OrderReceivedTemplate:
    intent_kind = IntentKind.RECEIVED

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number") or "N/A"
        return {
            "title": "📥 Order Received",
            "body": f"Order {order_number} has been received",
        }
