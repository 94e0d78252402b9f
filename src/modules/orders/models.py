"""Order, OrderItem and TrackingEvent models.

Business rules implemented:
- ``total_amount == sum(price * quantity) + delivery_fee + tax - discount``
  (checked before insert by the service and the repository, see
  ``modules.orders.invariants``).
- Order owns its line items and tracking events.  It references the user
  and each gift with PROTECT so history is never silently lost.
- OrderItem snapshots the unit price at order time; later catalog price
  changes never alter an existing order.
- TrackingEvent is append-only: a saved event can never be updated.
- Recipient, delivery address, payment info and delivery partner are
  stored as flat column groups on the order (value objects, not rows).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

import structlog
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.accounts.models import PHONE_VALIDATOR, ZIP_CODE_VALIDATOR
from modules.core.models import BaseModel
from modules.gifts.models import GiftGender
from modules.orders.constants import (
    MUTABLE_STATES,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from shared.domain.events import DomainEventMixin

logger = structlog.get_logger(__name__)

_MONEY = dict(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )

    # Recipient
    recipient_name = models.CharField(max_length=255)
    recipient_age = models.PositiveSmallIntegerField()
    recipient_gender = models.CharField(max_length=10, choices=GiftGender.choices)
    recipient_occasion = models.CharField(max_length=255, blank=True, default="")

    # Delivery address (copied, never a reference to a saved Address)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=6, validators=[ZIP_CODE_VALIDATOR])

    # Payment info (stored, never reconciled with a gateway)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_transaction_id = models.CharField(max_length=255, blank=True, default="")

    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    delivery_time = models.DateTimeField()
    special_instructions = models.TextField(blank=True, default="")

    total_amount = models.DecimalField(**_MONEY)
    delivery_fee = models.DecimalField(**_MONEY)
    tax = models.DecimalField(**_MONEY)
    discount = models.DecimalField(default=Decimal("0.00"), **_MONEY)

    # Delivery partner, assigned once the order is dispatched
    partner_name = models.CharField(max_length=255, blank=True, default="")
    partner_phone = models.CharField(max_length=10, blank=True, default="", validators=[PHONE_VALIDATOR])
    partner_lat = models.FloatField(null=True, blank=True)
    partner_lng = models.FloatField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="orders_user_created_idx"),
            models.Index(fields=["status"], name="orders_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_amount__gte=0)
                & models.Q(delivery_fee__gte=0)
                & models.Q(tax__gte=0)
                & models.Q(discount__gte=0),
                name="orders_amounts_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # State machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    @property
    def is_mutable(self) -> bool:
        """Customers may edit or cancel only before preparation starts."""
        return self.status in MUTABLE_STATES

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    # ------------------------------------------------------------------
    # Value-object views
    # ------------------------------------------------------------------

    @property
    def recipient(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.recipient_name,
            "age": self.recipient_age,
            "gender": self.recipient_gender,
        }
        if self.recipient_occasion:
            data["occasion"] = self.recipient_occasion
        return data

    @property
    def delivery_address(self) -> dict[str, str]:
        return {
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zipCode": self.zip_code,
        }

    @property
    def payment_info(self) -> dict[str, str]:
        data = {"method": self.payment_method, "status": self.payment_status}
        if self.payment_transaction_id:
            data["transactionId"] = self.payment_transaction_id
        return data

    @property
    def delivery_partner(self) -> Optional[dict[str, Any]]:
        if not self.partner_name:
            return None
        data: dict[str, Any] = {"name": self.partner_name, "phone": self.partner_phone}
        if self.partner_lat is not None and self.partner_lng is not None:
            data["currentLocation"] = {"lat": self.partner_lat, "lng": self.partner_lng}
        return data

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderItem(BaseModel):
    """Line item.  ``price`` is the unit price captured at order time."""

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    gift = models.ForeignKey(
        "gifts.Gift",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.DecimalField(**_MONEY)

    class Meta:
        db_table = "order_items"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="order_items_price_non_negative",
            ),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    def __str__(self) -> str:
        return f"{self.gift_id} x{self.quantity}"


class TrackingEvent(BaseModel):
    """Append-only delivery tracking entry.

    Ordered by ``timestamp`` and then by the time-ordered UUIDv7 ``id``, so
    insertion order wins when two events share a timestamp.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="tracking",
    )
    status = models.CharField(max_length=20, choices=OrderStatus.choices)
    timestamp = models.DateTimeField(default=timezone.now)
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_tracking_events"
        ordering = ["timestamp", "id"]
        indexes = [
            models.Index(fields=["order", "timestamp"], name="tracking_order_ts_idx"),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            raise ValidationError("Tracking events are append-only and cannot be modified.")
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.order_id} {self.status} @ {self.timestamp:%Y-%m-%d %H:%M}"
