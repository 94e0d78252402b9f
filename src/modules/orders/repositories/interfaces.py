"""Order repository interface.

Extends ``IRepository[Order]`` with what the order services need: atomic
creation of the aggregate (order, lines, first tracking event), row-locked
reads for updates, and append-only tracking.
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.dtos import PlaceOrderDTO
    from modules.orders.models import Order, TrackingEvent


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def create(self, user_id: str, dto: PlaceOrderDTO, delivery_time: datetime) -> Order:
        """Insert an order, its line items and the initial tracking event.

        Must run inside the caller's transaction.  Refuses to insert an
        order whose amounts are inconsistent.
        """

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list_for_user(self, user_id: str, status: Optional[str] = None) -> "models.QuerySet[Order]":
        """The user's orders, newest first."""

    @abstractmethod
    def append_tracking(
        self,
        order: Order,
        status: str,
        description: str = "",
        timestamp: Optional[datetime] = None,
    ) -> TrackingEvent:
        """Append a tracking event to the order."""
