"""Unit tests for gift DTOs."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.gifts.dtos import AgeRangeDTO, GiftDTO, GiftPatchDTO, RecommendationQueryDTO
from modules.gifts.models import GiftGender

pytestmark = pytest.mark.unit

VALID = {
    "name": "Kite",
    "description": "A bright red kite for windy days.",
    "price": "9.50",
    "images": ["https://images.example.com/kite.png"],
    "category": "outdoors",
    "ageRange": {"min": 5, "max": 12},
}


def test_defaults():
    dto = GiftDTO.model_validate(VALID)

    assert dto.gender == GiftGender.UNISEX
    assert dto.stock_count == 0
    assert dto.estimated_delivery_time == 60


@pytest.mark.parametrize(
    "field, value",
    [
        ("price", "-1"),
        ("images", []),
        ("images", ["not a url"]),
        ("category", "weapons"),
        ("estimatedDeliveryTime", 61),
        ("rating", "5.5"),
        ("discount", 101),
        ("stockCount", -1),
    ],
)
def test_rejects_invalid_field(field, value):
    with pytest.raises(ValidationError):
        GiftDTO.model_validate({**VALID, field: value})


def test_age_range_must_be_ordered():
    assert AgeRangeDTO(min=4, max=4).max == 4
    with pytest.raises(ValidationError):
        AgeRangeDTO(min=5, max=4)


def test_patch_tracks_only_supplied_fields():
    dto = GiftPatchDTO.model_validate({"name": "Kite XL"})

    assert dto.model_fields_set == {"name"}


def test_recommendation_query_coerces_strings():
    dto = RecommendationQueryDTO.model_validate({"age": "7", "gender": "boy"})

    assert dto.age == 7
    assert dto.gender == GiftGender.BOY


def test_recommendation_query_rejects_negative_age():
    with pytest.raises(ValidationError):
        RecommendationQueryDTO.model_validate({"age": "-1", "gender": "boy"})
