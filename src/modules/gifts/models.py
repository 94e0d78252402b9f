"""Gift catalog model.

Business rules implemented:
- Price, stock count, rating and discount are never negative.
- ``age_min <= age_max``.
- Delivery is promised within the hour (``estimated_delivery_time <= 60``).
- ``in_stock`` mirrors ``stock_count > 0``.  ``save()`` normalises it and a
  check constraint guards every other write path (bulk updates included).
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel), so orders
  keep their gift reference after the gift leaves the catalog.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel

logger = structlog.get_logger(__name__)

MAX_DELIVERY_MINUTES = 60


class GiftCategory(models.TextChoices):
    TOYS = "toys", "Toys"
    BOOKS = "books", "Books"
    CLOTHES = "clothes", "Clothes"
    ELECTRONICS = "electronics", "Electronics"
    ART = "art", "Art"
    OUTDOORS = "outdoors", "Outdoors"
    ACCESSORIES = "accessories", "Accessories"
    EDUCATIONAL = "educational", "Educational"
    OTHER = "other", "Other"


class GiftGender(models.TextChoices):
    BOY = "boy", "Boy"
    GIRL = "girl", "Girl"
    UNISEX = "unisex", "Unisex"


class Gift(SoftDeleteModel):
    """Catalog item.  ``stock_count`` is mutated through the repository's
    conditional updates, never by read-modify-write in Python."""

    name = models.CharField(max_length=255)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    images = models.JSONField(default=list)
    category = models.CharField(max_length=20, choices=GiftCategory.choices)
    age_min = models.PositiveSmallIntegerField()
    age_max = models.PositiveSmallIntegerField()
    gender = models.CharField(
        max_length=10,
        choices=GiftGender.choices,
        default=GiftGender.UNISEX,
    )
    tags = models.JSONField(default=list, blank=True)
    in_stock = models.BooleanField(default=False)
    stock_count = models.PositiveIntegerField(default=0)
    estimated_delivery_time = models.PositiveSmallIntegerField(
        default=MAX_DELIVERY_MINUTES,
        validators=[MaxValueValidator(MAX_DELIVERY_MINUTES)],
    )
    rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("5"))],
    )
    is_popular = models.BooleanField(default=False)
    discount = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(100)],
    )

    class Meta:
        db_table = "gifts"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["gender", "age_min", "age_max"], name="gifts_gender_age_idx"),
            models.Index(fields=["category"], name="gifts_category_idx"),
            models.Index(fields=["-is_popular"], name="gifts_popular_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="gifts_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(age_max__gte=models.F("age_min")),
                name="gifts_age_range_ordered",
            ),
            models.CheckConstraint(
                condition=models.Q(estimated_delivery_time__lte=MAX_DELIVERY_MINUTES),
                name="gifts_delivery_within_hour",
            ),
            models.CheckConstraint(
                condition=models.Q(in_stock=True, stock_count__gt=0)
                | models.Q(in_stock=False, stock_count=0),
                name="gifts_in_stock_matches_count",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        self.in_stock = self.stock_count > 0
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "stock_count" in update_fields and "in_stock" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["in_stock"]
        super().save(*args, **kwargs)
        if is_new:
            logger.info("gift.created", gift_id=str(self.id), category=self.category)

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"
