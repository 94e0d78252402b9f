from decimal import Decimal
from itertools import count

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.accounts.models import User
from modules.gifts.models import Gift, GiftCategory, GiftGender

_sequence = count(1)


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_user():
    def _make(**overrides) -> User:
        n = next(_sequence)
        fields = {
            "email": f"user{n}@example.com",
            "password": "secret123",
            "name": f"User {n}",
            "phone": "5551234567",
        }
        fields.update(overrides)
        return User.objects.create_user(**fields)

    return _make


@pytest.fixture()
def user(make_user):
    return make_user(email="owner@example.com", name="Olive Owner")


@pytest.fixture()
def other_user(make_user):
    return make_user(email="stranger@example.com", name="Sam Stranger")


@pytest.fixture()
def staff_user(make_user):
    return make_user(email="staff@example.com", name="Stella Staff", is_staff=True)


@pytest.fixture()
def auth_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def other_client(other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture()
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


# ---------------------------------------------------------------------------
# Gifts and order payloads
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_gift():
    def _make(**overrides) -> Gift:
        n = next(_sequence)
        fields = {
            "name": f"Gift {n}",
            "description": "A lovely gift delivered within the hour.",
            "price": Decimal("10.00"),
            "images": ["https://images.example.com/gift.png"],
            "category": GiftCategory.TOYS,
            "age_min": 3,
            "age_max": 10,
            "gender": GiftGender.UNISEX,
            "stock_count": 5,
        }
        fields.update(overrides)
        return Gift.objects.create(**fields)

    return _make


@pytest.fixture()
def gift(make_gift):
    return make_gift(name="Wooden Train", price=Decimal("10.00"), stock_count=5)


@pytest.fixture()
def order_payload():
    """Build a camelCase order payload; ``totalAmount`` is computed unless given."""

    def _build(lines, delivery_fee="5", tax="1", discount="0", total_amount=None, **extra):
        items = [
            {"gift": str(gift.id), "quantity": quantity, "price": str(price)}
            for gift, quantity, price in lines
        ]
        if total_amount is None:
            subtotal = sum(Decimal(str(price)) * quantity for _, quantity, price in lines)
            total_amount = subtotal + Decimal(delivery_fee) + Decimal(tax) - Decimal(discount)
        payload = {
            "recipient": {"name": "Mia", "age": 6, "gender": "girl", "occasion": "Birthday"},
            "items": items,
            "deliveryAddress": {
                "address": "221 Baker Street",
                "city": "Springfield",
                "state": "Illinois",
                "zipCode": "62701",
            },
            "paymentInfo": {"method": "credit_card", "status": "completed", "transactionId": "txn_001"},
            "deliveryFee": str(delivery_fee),
            "tax": str(tax),
            "discount": str(discount),
            "totalAmount": str(total_amount),
        }
        payload.update(extra)
        return payload

    return _build
