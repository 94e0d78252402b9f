"""Gift DTOs (Pydantic v2).

Contracts between the API layer and ``GiftService``.  All DTOs are
immutable; wire names are camelCase (``ageRange``, ``stockCount``).

- ``GiftDTO``: full gift payload (create / replace).
- ``GiftPatchDTO``: partial update, only supplied fields are applied.
- ``RecommendationQueryDTO``: ``?age=&gender=`` with string coercion.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from modules.gifts.models import MAX_DELIVERY_MINUTES, GiftCategory, GiftGender


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class AgeRangeDTO(_WireModel):
    min: int = Field(ge=0)
    max: int = Field(ge=0)

    @field_validator("max")
    @classmethod
    def max_not_below_min(cls, v: int, info: ValidationInfo) -> int:
        low = info.data.get("min")
        if low is not None and v < low:
            raise PydanticCustomError(
                "age_range",
                "Maximum age must be greater than or equal to minimum age",
            )
        return v


class GiftDTO(_WireModel):
    name: str = Field(min_length=2)
    description: str = Field(min_length=10)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    images: List[HttpUrl] = Field(min_length=1)
    category: GiftCategory
    age_range: AgeRangeDTO
    gender: GiftGender = GiftGender.UNISEX
    tags: List[str] = Field(default_factory=list)
    stock_count: int = Field(default=0, ge=0)
    estimated_delivery_time: int = Field(default=MAX_DELIVERY_MINUTES, ge=0, le=MAX_DELIVERY_MINUTES)
    rating: Decimal = Field(default=Decimal("0"), ge=0, le=5)
    is_popular: bool = False
    discount: int = Field(default=0, ge=0, le=100)


class GiftPatchDTO(_WireModel):
    name: Optional[str] = Field(default=None, min_length=2)
    description: Optional[str] = Field(default=None, min_length=10)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    images: Optional[List[HttpUrl]] = Field(default=None, min_length=1)
    category: Optional[GiftCategory] = None
    age_range: Optional[AgeRangeDTO] = None
    gender: Optional[GiftGender] = None
    tags: Optional[List[str]] = None
    stock_count: Optional[int] = Field(default=None, ge=0)
    estimated_delivery_time: Optional[int] = Field(default=None, ge=0, le=MAX_DELIVERY_MINUTES)
    rating: Optional[Decimal] = Field(default=None, ge=0, le=5)
    is_popular: Optional[bool] = None
    discount: Optional[int] = Field(default=None, ge=0, le=100)


class RecommendationQueryDTO(_WireModel):
    age: int = Field(ge=0)
    gender: GiftGender
