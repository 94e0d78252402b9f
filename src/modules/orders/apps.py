from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.orders"
    label = "orders"

    def ready(self) -> None:
        from modules.orders.events import OrderCanceled, OrderPlaced, OrderStatusChanged
        from modules.orders.handlers import (
            order_canceled_handler,
            order_placed_handler,
            order_status_changed_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(OrderPlaced, order_placed_handler)
        event_bus.subscribe(OrderCanceled, order_canceled_handler)
        event_bus.subscribe(OrderStatusChanged, order_status_changed_handler)
