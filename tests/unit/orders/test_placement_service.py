"""Unit tests for OrderPlacementService.

Covers:
- Happy path: stock reserved, order pending with one tracking event.
- Amount mismatch rejected before any stock is touched.
- All-or-nothing reservation when any line is short.
- Authentication checked before any repository access.
- Infrastructure failures roll the reservation back.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from django.db import DatabaseError

from modules.core.exceptions import TransactionAborted, Unauthenticated, ValidationFailed
from modules.gifts.models import Gift
from modules.gifts.repositories.django_repository import GiftDjangoRepository
from modules.orders.constants import OrderStatus
from modules.orders.events import OrderPlaced
from modules.orders.exceptions import InventoryUnavailable
from modules.orders.invariants import amounts_consistent
from modules.orders.models import Order
from modules.orders.repositories import django_repository as order_repository_module
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderPlacementService
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit

NOW = datetime(2026, 5, 4, 9, 30, tzinfo=dt_timezone.utc)


@pytest.fixture()
def service():
    return OrderPlacementService(
        order_repository=OrderDjangoRepository(),
        gift_repository=GiftDjangoRepository(),
        clock=lambda: NOW,
    )


def _stock(gift):
    gift.refresh_from_db()
    return gift.stock_count


class TestPlaceOrder:
    def test_success_reserves_stock_and_records_pending(self, service, user, gift, order_payload):
        payload = order_payload([(gift, 2, "10")], delivery_fee="5", tax="1")

        order = service.place_order(str(user.id), payload)

        assert order.status == OrderStatus.PENDING
        assert order.user_id == user.id
        assert order.total_amount == Decimal("26.00")
        assert _stock(gift) == 3
        tracking = list(order.tracking.all())
        assert len(tracking) == 1
        assert tracking[0].status == OrderStatus.PENDING
        assert tracking[0].description == "Order received"
        items = list(order.items.all())
        assert [(item.gift_id, item.quantity, item.price) for item in items] == [
            (gift.id, 2, Decimal("10.00"))
        ]

    def test_default_delivery_time_is_one_hour_out(self, service, user, gift, order_payload):
        order = service.place_order(str(user.id), order_payload([(gift, 1, "10")]))

        assert order.delivery_time == NOW + timedelta(minutes=60)

    def test_explicit_delivery_time_is_kept(self, service, user, gift, order_payload):
        when = "2026-05-04T10:00:00+00:00"

        order = service.place_order(str(user.id), order_payload([(gift, 1, "10")], deliveryTime=when))

        assert order.delivery_time == datetime(2026, 5, 4, 10, 0, tzinfo=dt_timezone.utc)

    def test_amount_mismatch_leaves_stock_untouched(self, service, user, gift, order_payload):
        payload = order_payload([(gift, 2, "10")], delivery_fee="5", tax="1", total_amount="20")

        with pytest.raises(ValidationFailed) as exc_info:
            service.place_order(str(user.id), payload)

        assert "totalAmount" in exc_info.value.errors
        assert _stock(gift) == 5
        assert Order.objects.count() == 0

    def test_schema_error_reports_field_paths(self, service, user, gift, order_payload):
        payload = order_payload([(gift, 0, "10")])

        with pytest.raises(ValidationFailed) as exc_info:
            service.place_order(str(user.id), payload)

        assert "items.0.quantity" in exc_info.value.errors

    def test_sub_cent_prices_are_rejected(self, service, user, gift, order_payload):
        # Rounded to cents, 100 x 10.004 would be stored as 1000.00 against a total of 1000.40.
        payload = order_payload([(gift, 100, "10.004")], delivery_fee="0", tax="0", total_amount="1000.40")

        with pytest.raises(ValidationFailed) as exc_info:
            service.place_order(str(user.id), payload)

        assert "items.0.price" in exc_info.value.errors
        assert _stock(gift) == 5
        assert Order.objects.count() == 0

    @pytest.mark.parametrize("field", ["deliveryFee", "tax", "discount", "totalAmount"])
    def test_sub_cent_charges_are_rejected(self, service, user, gift, order_payload, field):
        payload = order_payload([(gift, 1, "10")], delivery_fee="0", tax="0", total_amount="10")
        payload[field] = "0.005" if field != "totalAmount" else "10.004"

        with pytest.raises(ValidationFailed) as exc_info:
            service.place_order(str(user.id), payload)

        assert field in exc_info.value.errors

    def test_amounts_wider_than_the_money_columns_are_rejected(self, service, user, gift, order_payload):
        payload = order_payload([(gift, 1, "123456789012.00")])

        with pytest.raises(ValidationFailed) as exc_info:
            service.place_order(str(user.id), payload)

        assert "items.0.price" in exc_info.value.errors
        assert "totalAmount" in exc_info.value.errors
        assert _stock(gift) == 5
        assert Order.objects.count() == 0

    def test_stored_order_keeps_amounts_consistent(self, service, user, gift, order_payload):
        payload = order_payload([(gift, 3, "9.99")], delivery_fee="4.50", tax="1.25", discount="2.10")

        order = service.place_order(str(user.id), payload)

        lines = [(item.price, item.quantity) for item in order.items.all()]
        assert amounts_consistent(lines, order.delivery_fee, order.tax, order.discount, order.total_amount)

    def test_short_line_rolls_back_every_reservation(self, service, user, make_gift, order_payload):
        plenty = make_gift(stock_count=10)
        scarce = make_gift(stock_count=1)
        payload = order_payload([(plenty, 3, "10"), (scarce, 2, "10")])

        with pytest.raises(InventoryUnavailable) as exc_info:
            service.place_order(str(user.id), payload)

        assert exc_info.value.gift_id == str(scarce.id)
        assert _stock(plenty) == 10
        assert _stock(scarce) == 1
        assert Order.objects.count() == 0

    def test_lines_for_the_same_gift_are_reserved_together(self, service, user, gift, order_payload):
        payload = order_payload([(gift, 3, "10"), (gift, 3, "10")])

        with pytest.raises(InventoryUnavailable):
            service.place_order(str(user.id), payload)

        assert _stock(gift) == 5

    def test_last_unit_flips_in_stock(self, service, user, make_gift, order_payload):
        last = make_gift(stock_count=2)

        service.place_order(str(user.id), order_payload([(last, 2, "10")]))

        last.refresh_from_db()
        assert last.stock_count == 0
        assert last.in_stock is False

    def test_deleted_gift_is_unavailable(self, service, user, gift, order_payload):
        gift.delete()

        with pytest.raises(InventoryUnavailable):
            service.place_order(str(user.id), order_payload([(gift, 1, "10")]))

    def test_unknown_gift_is_unavailable(self, service, user, gift, order_payload):
        payload = order_payload([(gift, 1, "10")])
        payload["items"][0]["gift"] = str(uuid4())

        with pytest.raises(InventoryUnavailable):
            service.place_order(str(user.id), payload)

    def test_stale_stock_view_is_rejected(self, service, user, gift, order_payload):
        payload = order_payload([(gift, 3, "10")])
        # Someone else bought most of the stock after the cart was built.
        Gift.objects.filter(pk=gift.pk).update(stock_count=1)

        with pytest.raises(InventoryUnavailable):
            service.place_order(str(user.id), payload)

        assert _stock(gift) == 1

    def test_last_unit_goes_to_one_of_two_buyers(self, service, user, other_user, make_gift, order_payload):
        last = make_gift(stock_count=1)
        carts = [(buyer, order_payload([(last, 1, "10")])) for buyer in (user, other_user)]

        outcomes = []
        for buyer, cart in carts:
            try:
                service.place_order(str(buyer.id), cart)
                outcomes.append("placed")
            except InventoryUnavailable:
                outcomes.append("unavailable")

        assert outcomes == ["placed", "unavailable"]
        assert Order.objects.count() == 1
        last.refresh_from_db()
        assert (last.stock_count, last.in_stock) == (0, False)

    def test_caller_supplied_owner_and_status_are_ignored(self, service, user, other_user, gift, order_payload):
        payload = order_payload(
            [(gift, 1, "10")],
            user=str(other_user.id),
            status="delivered",
            tracking=[{"status": "delivered", "description": "forged"}],
        )

        order = service.place_order(str(user.id), payload)

        assert order.user_id == user.id
        assert order.status == OrderStatus.PENDING
        assert [event.description for event in order.tracking.all()] == ["Order received"]

    def test_anonymous_caller_is_rejected_before_any_lookup(self, order_payload, gift):
        orders, gifts = MagicMock(), MagicMock()
        service = OrderPlacementService(order_repository=orders, gift_repository=gifts)

        with pytest.raises(Unauthenticated):
            service.place_order(None, order_payload([(gift, 1, "10")]))

        orders.create.assert_not_called()
        gifts.reserve_stock.assert_not_called()

    def test_database_failure_aborts_and_restores_stock(self, user, gift, order_payload):
        orders = MagicMock()
        orders.create.side_effect = DatabaseError("connection lost")
        service = OrderPlacementService(order_repository=orders, gift_repository=GiftDjangoRepository())

        with pytest.raises(TransactionAborted):
            service.place_order(str(user.id), order_payload([(gift, 2, "10")]))

        assert _stock(gift) == 5

    def test_order_placed_published_after_commit(
        self, service, user, gift, order_payload, monkeypatch, django_capture_on_commit_callbacks
    ):
        bus = InMemoryEventBus()
        handler = MagicMock()
        bus.subscribe(OrderPlaced, handler)
        monkeypatch.setattr(order_repository_module, "event_bus", bus)

        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            order = service.place_order(str(user.id), order_payload([(gift, 1, "10")]))
            handler.handle.assert_not_called()

        assert len(callbacks) == 1
        callbacks[0]()
        event = handler.handle.call_args.args[0]
        assert event.aggregate_id == order.id
        assert event.item_count == 1
