"""Unit tests for domain event primitives and the in-memory bus."""

from __future__ import annotations

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.events import OrderCanceled, OrderPlaced, OrderStatusChanged
from modules.orders.models import Order
from shared.infrastructure.bus import InMemoryEventBus

pytestmark = pytest.mark.unit


def test_order_registers_and_clears_domain_events():
    order = Order(status=OrderStatus.PENDING)

    assert order.domain_events == []

    event = OrderPlaced(aggregate_id=order.id, user_id="u-1", item_count=2)
    order.add_domain_event(event)

    assert order.domain_events == [event]
    assert event.event_name == "OrderPlaced"

    order.clear_domain_events()
    assert order.domain_events == []


def test_domain_events_returns_a_copy():
    order = Order()
    order.add_domain_event(OrderCanceled(aggregate_id=order.id))

    order.domain_events.clear()

    assert len(order.domain_events) == 1


def test_events_are_immutable():
    event = OrderStatusChanged(aggregate_id=uuid4(), old_status="pending", new_status="confirmed")

    with pytest.raises(AttributeError):
        event.new_status = "delivered"


class TestInMemoryEventBus:
    def test_publish_reaches_subscribers_of_that_class_only(self):
        bus = InMemoryEventBus()
        placed, canceled = MagicMock(), MagicMock()
        bus.subscribe(OrderPlaced, placed)
        bus.subscribe(OrderCanceled, canceled)

        event = OrderPlaced(aggregate_id=uuid4())
        bus.publish(event)

        placed.handle.assert_called_once_with(event)
        canceled.handle.assert_not_called()

    def test_subscribing_twice_is_idempotent(self):
        bus = InMemoryEventBus()
        handler = MagicMock()
        bus.subscribe(OrderPlaced, handler)
        bus.subscribe(OrderPlaced, handler)

        bus.publish(OrderPlaced(aggregate_id=uuid4()))

        assert bus.handlers_for(OrderPlaced) == [handler]
        handler.handle.assert_called_once()

    def test_publish_without_subscribers_is_noop(self):
        InMemoryEventBus().publish(OrderCanceled(aggregate_id=uuid4()))
