"""Gift repository interface.

Extends ``IRepository[Gift]`` with the catalog queries and the two stock
mutation primitives used by order placement and cancellation.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Collection, List

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.gifts.models import Gift


class IGiftRepository(IRepository["Gift"]):
    """Repository contract for the Gift aggregate."""

    @abstractmethod
    def catalog(self) -> "models.QuerySet[Gift]":
        """Live, in-stock gifts (the public listing before filters)."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Soft-delete a gift.  ``False`` if it does not exist."""

    @abstractmethod
    def find_suitable(
        self,
        age_from: int,
        age_to: int,
        gender: str,
        exclude_ids: Collection[str] = (),
        limit: int = 10,
    ) -> List["Gift"]:
        """Deliverable gifts whose age range overlaps ``[age_from, age_to]``."""

    @abstractmethod
    def reserve_stock(self, gift_id: str, quantity: int) -> bool:
        """Atomically decrement stock if at least *quantity* units are available.

        Returns ``False`` when nothing was decremented.
        """

    @abstractmethod
    def release_stock(self, gift_id: str, quantity: int) -> None:
        """Return *quantity* units to a gift's stock."""
