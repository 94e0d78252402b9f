"""Django ORM implementation of the Gift repository.

Lookup methods follow the Null Object pattern (``None`` / ``False`` instead
of raising); the service layer decides what a missing gift means.

Stock mutations are single conditional ``UPDATE`` statements.  The database
serializes concurrent writers on the row, so two requests can never both
take the last unit, and a failed reservation leaves the row untouched.
"""

from __future__ import annotations

from typing import Any, Collection, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Case, F, Q, Value, When
from django.utils import timezone

from modules.gifts.models import MAX_DELIVERY_MINUTES, Gift, GiftGender
from modules.gifts.repositories.interfaces import IGiftRepository

logger = structlog.get_logger(__name__)


class GiftDjangoRepository(IGiftRepository):
    """Concrete Gift repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Gift]:
        """Retrieve a live gift by primary key.

        Returns ``None`` for unknown, soft-deleted or malformed IDs.
        """
        try:
            return Gift.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Gift]:
        queryset = Gift.objects.alive()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def catalog(self):
        return Gift.objects.alive().filter(in_stock=True)

    @transaction.atomic
    def save(self, entity: Gift) -> Gift:
        entity.save()
        logger.info("gift.saved", gift_id=str(entity.id), stock_count=entity.stock_count)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        gift = self.get_by_id(id)
        if not gift:
            return False
        gift.delete()
        logger.info("gift.soft_deleted", gift_id=str(id))
        return True

    def find_suitable(
        self,
        age_from: int,
        age_to: int,
        gender: str,
        exclude_ids: Collection[str] = (),
        limit: int = 10,
    ) -> List[Gift]:
        if limit <= 0:
            return []
        queryset = (
            Gift.objects.alive()
            .filter(
                Q(gender=gender) | Q(gender=GiftGender.UNISEX),
                age_min__lte=age_to,
                age_max__gte=age_from,
                in_stock=True,
                stock_count__gt=0,
                estimated_delivery_time__lte=MAX_DELIVERY_MINUTES,
            )
            .exclude(id__in=list(exclude_ids))
            .order_by("-is_popular", "-rating", "id")
        )
        return list(queryset[:limit])

    # ------------------------------------------------------------------
    # Stock mutations
    # ------------------------------------------------------------------

    def reserve_stock(self, gift_id: str, quantity: int) -> bool:
        """Conditional decrement guarded by ``stock_count >= quantity``.

        ``in_stock`` is assigned first and computed from the pre-update
        count, so the row satisfies ``in_stock == (stock_count > 0)`` after
        the statement on every backend (MySQL evaluates SET left to right).
        """
        if quantity < 1:
            return False
        try:
            updated = (
                Gift.objects.alive()
                .filter(pk=gift_id, in_stock=True, stock_count__gte=quantity)
                .update(
                    in_stock=Case(
                        When(stock_count__gt=quantity, then=Value(True)),
                        default=Value(False),
                    ),
                    stock_count=F("stock_count") - quantity,
                    updated_at=timezone.now(),
                )
            )
        except (ValueError, ValidationError):
            return False
        if updated:
            logger.debug("gift.stock_reserved", gift_id=str(gift_id), quantity=quantity)
        return updated == 1

    def release_stock(self, gift_id: str, quantity: int) -> None:
        if quantity < 1:
            return
        Gift.objects.filter(pk=gift_id).update(
            in_stock=Value(True),
            stock_count=F("stock_count") + quantity,
            updated_at=timezone.now(),
        )
        logger.debug("gift.stock_released", gift_id=str(gift_id), quantity=quantity)
