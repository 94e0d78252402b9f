"""Order domain exceptions.

Raised by the order services; the views translate them through
``modules.core.results.from_error``.
"""

from __future__ import annotations

from typing import Optional

from modules.core.exceptions import DomainError, ErrorKind, NotFound


class OrderNotFound(NotFound):
    default_message = "Order not found"


class InventoryUnavailable(DomainError):
    """A line's gift is missing, deleted, or short on stock.

    Raised inside the atomic phase, so every reservation already made for
    the same order is rolled back.
    """

    kind = ErrorKind.INVENTORY_UNAVAILABLE

    def __init__(self, gift_id: str) -> None:
        self.gift_id = str(gift_id)
        super().__init__(f"Gift {self.gift_id} is out of stock or unavailable")


class InvalidStateTransition(DomainError):
    """The order's current status does not allow the requested change."""

    kind = ErrorKind.INVALID_STATE_TRANSITION

    def __init__(self, current: str, target: Optional[str] = None, message: Optional[str] = None) -> None:
        self.current = current
        self.target = target
        if message is None:
            message = (
                f"Cannot change order status from '{current}' to '{target}'"
                if target
                else f"Order cannot be modified in '{current}' status"
            )
        super().__init__(message)
