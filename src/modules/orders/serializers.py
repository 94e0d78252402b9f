"""Order read serializers (camelCase output).

Input is validated by the Pydantic DTOs in ``dtos.py``; these serializers
only render orders.  Recipient, address, payment and partner column groups
are exposed as nested objects through the model's value-object properties.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderItem, TrackingEvent


class OrderItemSerializer(serializers.ModelSerializer):
    gift = serializers.UUIDField(source="gift_id", read_only=True)
    giftName = serializers.CharField(source="gift.name", read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "gift", "giftName", "quantity", "price"]
        read_only_fields = fields


class TrackingEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = TrackingEvent
        fields = ["status", "timestamp", "description"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    user = serializers.UUIDField(source="user_id", read_only=True)
    recipient = serializers.ReadOnlyField()
    items = OrderItemSerializer(many=True, read_only=True)
    deliveryAddress = serializers.ReadOnlyField(source="delivery_address")
    paymentInfo = serializers.ReadOnlyField(source="payment_info")
    deliveryTime = serializers.DateTimeField(source="delivery_time", read_only=True)
    specialInstructions = serializers.CharField(source="special_instructions", read_only=True)
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=10, decimal_places=2, read_only=True)
    deliveryFee = serializers.DecimalField(source="delivery_fee", max_digits=10, decimal_places=2, read_only=True)
    deliveryPartner = serializers.ReadOnlyField(source="delivery_partner")
    tracking = TrackingEventSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "user",
            "recipient",
            "items",
            "deliveryAddress",
            "paymentInfo",
            "status",
            "deliveryTime",
            "specialInstructions",
            "totalAmount",
            "deliveryFee",
            "tax",
            "discount",
            "deliveryPartner",
            "tracking",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class OrderTrackingSerializer(serializers.ModelSerializer):
    """Payload of ``GET /orders/{id}/track/``."""

    orderId = serializers.UUIDField(source="id", read_only=True)
    tracking = TrackingEventSerializer(many=True, read_only=True)
    deliveryPartner = serializers.ReadOnlyField(source="delivery_partner")
    estimatedDelivery = serializers.DateTimeField(source="delivery_time", read_only=True)
    recipient = serializers.ReadOnlyField()
    deliveryAddress = serializers.ReadOnlyField(source="delivery_address")

    class Meta:
        model = Order
        fields = [
            "orderId",
            "status",
            "tracking",
            "deliveryPartner",
            "estimatedDelivery",
            "recipient",
            "deliveryAddress",
        ]
        read_only_fields = fields
