"""Event handlers for Orders domain events.

They run after commit (see ``OrderDjangoRepository.save``) and only log;
a failing handler never undoes a committed order.
"""

from __future__ import annotations

import structlog

from modules.orders.events import OrderCanceled, OrderPlaced, OrderStatusChanged
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderPlacedHandler(IEventHandler[OrderPlaced]):
    def handle(self, event: OrderPlaced) -> None:
        logger.info(
            "order.event.placed",
            order_id=str(event.aggregate_id),
            user_id=event.user_id,
            item_count=event.item_count,
        )


class OrderCanceledHandler(IEventHandler[OrderCanceled]):
    def handle(self, event: OrderCanceled) -> None:
        logger.info(
            "order.event.canceled",
            order_id=str(event.aggregate_id),
            restocked=event.restocked,
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            "order.event.status_changed",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
        )


order_placed_handler = OrderPlacedHandler()
order_canceled_handler = OrderCanceledHandler()
order_status_changed_handler = OrderStatusChangedHandler()
