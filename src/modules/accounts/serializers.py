"""Account read serializers (the password hash is never exposed)."""

from __future__ import annotations

from rest_framework import serializers

from modules.accounts.models import Address, User


class AddressSerializer(serializers.ModelSerializer):
    zipCode = serializers.CharField(source="zip_code", read_only=True)
    isDefault = serializers.BooleanField(source="is_default", read_only=True)

    class Meta:
        model = Address
        fields = ["id", "type", "address", "city", "state", "zipCode", "isDefault"]
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    addresses = AddressSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "email", "phone", "addresses", "createdAt"]
        read_only_fields = fields
