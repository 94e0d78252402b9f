"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderPlaced(DomainEvent):
    """Raised when an order and its reservations commit."""

    user_id: str = ""
    item_count: int = 0


@dataclass(frozen=True)
class OrderCanceled(DomainEvent):
    """Raised when an order is canceled."""

    reason: str = ""
    restocked: bool = False


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Raised when staff move an order forward."""

    old_status: str = ""
    new_status: str = ""
