"""Django ORM implementation of the Order repository.

Writes never open their own transaction for the placement path: the
placement service owns the single ``transaction.atomic()`` block that
enrols the stock reservations and these inserts together.

Domain events collected on the aggregate are published through
``transaction.on_commit`` so handlers never observe rolled-back orders.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from functools import partial
from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from modules.core.exceptions import ValidationFailed
from modules.orders.constants import TRACKING_DESCRIPTIONS, OrderStatus
from modules.orders.dtos import PlaceOrderDTO
from modules.orders.events import OrderPlaced
from modules.orders.invariants import AMOUNT_MISMATCH_MESSAGE, amounts_consistent
from modules.orders.models import Order, OrderItem, TrackingEvent
from modules.orders.repositories.interfaces import IOrderRepository
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    def create(self, user_id: str, dto: PlaceOrderDTO, delivery_time: datetime) -> Order:
        # Checked on the stored (quantised) values.
        lines = [(_money(line.price), line.quantity) for line in dto.items]
        if not amounts_consistent(
            lines, _money(dto.delivery_fee), _money(dto.tax), _money(dto.discount), _money(dto.total_amount)
        ):
            raise ValidationFailed({"totalAmount": AMOUNT_MISMATCH_MESSAGE})

        order = Order(
            user_id=user_id,
            recipient_name=dto.recipient.name,
            recipient_age=dto.recipient.age,
            recipient_gender=str(dto.recipient.gender),
            recipient_occasion=dto.recipient.occasion or "",
            address=dto.delivery_address.address,
            city=dto.delivery_address.city,
            state=dto.delivery_address.state,
            zip_code=dto.delivery_address.zip_code,
            payment_method=str(dto.payment_info.method),
            payment_status=str(dto.payment_info.status),
            payment_transaction_id=dto.payment_info.transaction_id or "",
            status=OrderStatus.PENDING,
            delivery_time=delivery_time,
            special_instructions=dto.special_instructions or "",
            total_amount=_money(dto.total_amount),
            delivery_fee=_money(dto.delivery_fee),
            tax=_money(dto.tax),
            discount=_money(dto.discount),
        )
        order.save()

        OrderItem.objects.bulk_create(
            [
                OrderItem(order=order, gift_id=line.gift, quantity=line.quantity, price=_money(line.price))
                for line in dto.items
            ]
        )
        self.append_tracking(order, OrderStatus.PENDING, TRACKING_DESCRIPTIONS[OrderStatus.PENDING])

        order.add_domain_event(
            OrderPlaced(aggregate_id=order.id, user_id=str(user_id), item_count=len(dto.items))
        )
        self._dispatch_events(order)

        logger.info("order.created", order_id=str(order.id), item_count=len(dto.items))
        return self.get_by_id(order.id)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _queryset(self):
        return Order.objects.select_related("user").prefetch_related("items__gift", "tracking")

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its lines and tracking prefetched.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return self._queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Lock the order row for the rest of the caller's transaction."""
        try:
            return (
                Order.objects.select_for_update()
                .prefetch_related("items", "tracking")
                .filter(id=id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        queryset = self._queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_for_user(self, user_id: str, status: Optional[str] = None):
        queryset = self._queryset().filter(user_id=user_id)
        if status:
            queryset = queryset.filter(status=status)
        return queryset.order_by("-created_at", "-id")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        entity.save()
        self._dispatch_events(entity)
        logger.info("order.saved", order_id=str(entity.id), status=entity.status)
        return entity

    def append_tracking(
        self,
        order: Order,
        status: str,
        description: str = "",
        timestamp: Optional[datetime] = None,
    ) -> TrackingEvent:
        event = TrackingEvent.objects.create(
            order=order,
            status=status,
            description=description,
            timestamp=timestamp or timezone.now(),
        )
        logger.info("order.tracking_appended", order_id=str(order.id), status=status)
        return event

    def _dispatch_events(self, entity: Order) -> None:
        events = entity.domain_events
        entity.clear_domain_events()
        for event in events:
            transaction.on_commit(partial(event_bus.publish, event), robust=True)
