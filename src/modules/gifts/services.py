"""Gift service layer (catalog use cases).

Receives an ``IGiftRepository`` via constructor injection.  Stock is only
ever set here by staff edits; order placement goes through the repository's
conditional ``reserve_stock``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Union

import structlog
from django.db import transaction

from modules.gifts.exceptions import GiftNotFound
from modules.gifts.models import Gift

if TYPE_CHECKING:
    from modules.gifts.dtos import GiftDTO, GiftPatchDTO, RecommendationQueryDTO
    from modules.gifts.repositories.interfaces import IGiftRepository

logger = structlog.get_logger(__name__)

RECOMMENDATION_LIMIT = 10
RECOMMENDATION_MIN_RESULTS = 5
RECOMMENDATION_AGE_SLACK = 2


def _model_fields(dto: Union[GiftDTO, GiftPatchDTO], partial: bool) -> Dict[str, Any]:
    """Map DTO fields onto Gift column names."""
    data = dto.model_dump(exclude_unset=partial)
    if partial:
        data = {key: value for key, value in data.items() if value is not None}
    age_range = data.pop("age_range", None)
    if age_range is not None:
        data["age_min"] = age_range["min"]
        data["age_max"] = age_range["max"]
    if "images" in data:
        data["images"] = [str(url) for url in data["images"]]
    for choice in ("category", "gender"):
        if choice in data:
            data[choice] = str(data[choice])
    return data


class GiftService:
    """Application service for Gift use-cases."""

    def __init__(self, repository: IGiftRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands (staff)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_gift(self, dto: GiftDTO) -> Gift:
        gift = self._repo.save(Gift(**_model_fields(dto, partial=False)))
        logger.info("gift.registered", gift_id=str(gift.id), stock_count=gift.stock_count)
        return gift

    @transaction.atomic
    def update_gift(self, id: str, dto: Union[GiftDTO, GiftPatchDTO], partial: bool = False) -> Gift:
        """Replace (``partial=False``) or patch a gift.

        Raises:
            GiftNotFound: unknown or soft-deleted gift.
        """
        gift = self._repo.get_by_id(id)
        if not gift:
            raise GiftNotFound()

        changes = _model_fields(dto, partial=partial)
        for field, value in changes.items():
            setattr(gift, field, value)

        gift = self._repo.save(gift)
        logger.info("gift.updated", gift_id=str(id), fields=sorted(changes))
        return gift

    @transaction.atomic
    def delete_gift(self, id: str) -> None:
        """Soft-delete a gift.

        Raises:
            GiftNotFound: unknown or already deleted gift.
        """
        if not self._repo.delete(id):
            raise GiftNotFound()

    # ------------------------------------------------------------------
    # Queries (public)
    # ------------------------------------------------------------------

    def catalog(self):
        """Base queryset for the public listing (filters applied by the view)."""
        return self._repo.catalog()

    def get_gift(self, id: str) -> Gift:
        gift = self._repo.get_by_id(id)
        if not gift:
            raise GiftNotFound()
        return gift

    def recommend(self, query: RecommendationQueryDTO) -> List[Gift]:
        """Up to ten deliverable gifts for a recipient's age and gender.

        Exact age matches come first.  With fewer than five of them the age
        window is widened by two years each way to fill the remaining slots.
        Results are ordered popular first, then by rating.
        """
        gender = str(query.gender)
        gifts = self._repo.find_suitable(
            query.age, query.age, gender, limit=RECOMMENDATION_LIMIT
        )
        if len(gifts) < RECOMMENDATION_MIN_RESULTS:
            gifts += self._repo.find_suitable(
                query.age - RECOMMENDATION_AGE_SLACK,
                query.age + RECOMMENDATION_AGE_SLACK,
                gender,
                exclude_ids=[gift.id for gift in gifts],
                limit=RECOMMENDATION_LIMIT - len(gifts),
            )
        logger.info("gift.recommended", age=query.age, gender=gender, count=len(gifts))
        return gifts
