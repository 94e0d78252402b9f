"""Order domain constants.

Status, payment and recipient choices plus the order state machine:

    pending -> confirmed -> preparing -> out_for_delivery -> delivered
    pending | confirmed -> canceled

``delivered`` and ``canceled`` are terminal.  Customers may only edit or
cancel an order while it is still ``pending`` or ``confirmed``.
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    CONFIRMED = "confirmed", "Confirmed"
    PREPARING = "preparing", "Preparing"
    OUT_FOR_DELIVERY = "out_for_delivery", "Out for delivery"
    DELIVERED = "delivered", "Delivered"
    CANCELED = "canceled", "Canceled"


class PaymentMethod(models.TextChoices):
    CREDIT_CARD = "credit_card", "Credit card"
    DEBIT_CARD = "debit_card", "Debit card"
    UPI = "upi", "UPI"
    WALLET = "wallet", "Wallet"
    CASH_ON_DELIVERY = "cash_on_delivery", "Cash on delivery"


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    FAILED = "failed", "Failed"
    REFUNDED = "refunded", "Refunded"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING, OrderStatus.CANCELED},
    OrderStatus.PREPARING: {OrderStatus.OUT_FOR_DELIVERY},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELED: set(),
}

TERMINAL_STATES: set[str] = {OrderStatus.DELIVERED, OrderStatus.CANCELED}

MUTABLE_STATES: set[str] = {OrderStatus.PENDING, OrderStatus.CONFIRMED}

TRACKING_DESCRIPTIONS: dict[str, str] = {
    OrderStatus.PENDING: "Order received",
    OrderStatus.CONFIRMED: "Order confirmed",
    OrderStatus.PREPARING: "Gift is being prepared",
    OrderStatus.OUT_FOR_DELIVERY: "Out for delivery",
    OrderStatus.DELIVERED: "Delivered",
    OrderStatus.CANCELED: "Order canceled",
}

AMOUNT_TOLERANCE = Decimal("0.01")

CUSTOMER_CANCELLATION_DESCRIPTION = "Canceled by customer"
