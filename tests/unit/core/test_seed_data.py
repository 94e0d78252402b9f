"""Unit tests for the ``seed_data`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from modules.accounts.models import User
from modules.gifts.models import Gift
from modules.orders.models import Order

pytestmark = pytest.mark.unit


def test_seed_creates_users_catalog_and_orders():
    out = StringIO()

    call_command("seed_data", stdout=out)

    assert User.objects.filter(email="admin@example.com", is_staff=True).exists()
    assert Gift.objects.count() == 10
    assert Order.objects.count() == 3
    assert "Seed completed: gifts=10, orders=3" in out.getvalue()


def test_seed_is_idempotent_for_users_and_gifts():
    call_command("seed_data", stdout=StringIO())
    call_command("seed_data", stdout=StringIO())

    assert User.objects.count() == 2
    assert Gift.objects.count() == 10
