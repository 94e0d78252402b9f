"""Unit tests for the order status state machine."""

from __future__ import annotations

import pytest

from modules.orders.constants import MUTABLE_STATES, TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus
from modules.orders.models import Order

pytestmark = pytest.mark.unit

S = OrderStatus


@pytest.mark.parametrize(
    "current, target",
    [
        (S.PENDING, S.CONFIRMED),
        (S.PENDING, S.CANCELED),
        (S.CONFIRMED, S.PREPARING),
        (S.CONFIRMED, S.CANCELED),
        (S.PREPARING, S.OUT_FOR_DELIVERY),
        (S.OUT_FOR_DELIVERY, S.DELIVERED),
    ],
)
def test_allowed_transitions(current, target):
    assert Order(status=current).can_transition_to(target)


@pytest.mark.parametrize(
    "current, target",
    [
        (S.PENDING, S.PREPARING),
        (S.PENDING, S.DELIVERED),
        (S.CONFIRMED, S.OUT_FOR_DELIVERY),
        (S.PREPARING, S.CANCELED),
        (S.OUT_FOR_DELIVERY, S.CANCELED),
        (S.DELIVERED, S.CANCELED),
        (S.CANCELED, S.PENDING),
        (S.CONFIRMED, S.PENDING),
    ],
)
def test_rejected_transitions(current, target):
    assert not Order(status=current).can_transition_to(target)


def test_terminal_states_have_no_exits():
    for status in TERMINAL_STATES:
        assert VALID_TRANSITIONS[status] == set()
        assert Order(status=status).is_terminal


def test_every_status_has_a_transition_entry():
    assert set(VALID_TRANSITIONS) == set(S.values)


def test_only_pending_and_confirmed_are_mutable():
    assert MUTABLE_STATES == {S.PENDING, S.CONFIRMED}
    assert Order(status=S.CONFIRMED).is_mutable
    assert not Order(status=S.PREPARING).is_mutable
