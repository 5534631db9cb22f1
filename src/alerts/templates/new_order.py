"""New order template — sent when an order record is first written."""

from alerts.order.intent import IntentKind


class NewOrderTemplate:
    intent_kind = IntentKind.NEW_ORDER

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number") or "N/A"
        customer_name = context.get("customer_name") or "N/A"
        item_count = context.get("item_count")
        if item_count is None:
            item_count = "N/A"
        return {
            "title": "🆕 New Order Created",
            "body": f"Order {order_number} for {customer_name} - {item_count} items",
        }
