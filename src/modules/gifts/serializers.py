"""Gift read serializer (camelCase output).

Writes go through ``GiftDTO`` / ``GiftPatchDTO`` and ``GiftService``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.gifts.models import Gift


class GiftSerializer(serializers.ModelSerializer):
    ageRange = serializers.SerializerMethodField()
    inStock = serializers.BooleanField(source="in_stock", read_only=True)
    stockCount = serializers.IntegerField(source="stock_count", read_only=True)
    estimatedDeliveryTime = serializers.IntegerField(source="estimated_delivery_time", read_only=True)
    isPopular = serializers.BooleanField(source="is_popular", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Gift
        fields = [
            "id",
            "name",
            "description",
            "price",
            "images",
            "category",
            "ageRange",
            "gender",
            "tags",
            "inStock",
            "stockCount",
            "estimatedDeliveryTime",
            "rating",
            "isPopular",
            "discount",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_ageRange(self, obj: Gift) -> dict:
        return {"min": obj.age_min, "max": obj.age_max}
