"""Unit tests for the result envelope and the error taxonomy."""

from __future__ import annotations

import pytest

from modules.core.exceptions import (
    AccessDenied,
    ErrorKind,
    NotFound,
    TransactionAborted,
    Unauthenticated,
    ValidationFailed,
)
from modules.core.results import Failure, Invalid, Ok, from_error
from modules.orders.exceptions import InvalidStateTransition, InventoryUnavailable, OrderNotFound

pytestmark = pytest.mark.unit


class TestEnvelope:
    def test_ok_wraps_payload(self):
        response = Ok({"id": 1}, 201).to_response()

        assert response.status_code == 201
        assert response.data == {"success": True, "data": {"id": 1}}

    def test_invalid_carries_error_map(self):
        response = Invalid({"items": "required"}).to_response()

        assert response.status_code == 400
        assert response.data == {"success": False, "errors": {"items": "required"}}

    def test_failure_carries_kind_and_message(self):
        response = Failure(ErrorKind.NOT_FOUND, "Order not found").to_response()

        assert response.status_code == 404
        assert response.data == {"success": False, "error": "Order not found", "kind": "not_found"}


class TestFromError:
    def test_validation_failed_becomes_invalid(self):
        result = from_error(ValidationFailed({"totalAmount": "mismatch"}))

        assert isinstance(result, Invalid)
        assert result.errors == {"totalAmount": "mismatch"}

    @pytest.mark.parametrize(
        "exc, status_code",
        [
            (Unauthenticated(), 401),
            (AccessDenied(), 403),
            (NotFound(), 404),
            (OrderNotFound(), 404),
            (InvalidStateTransition("delivered", "canceled"), 400),
            (InventoryUnavailable("gift-1"), 500),
            (TransactionAborted(), 500),
        ],
    )
    def test_status_codes_by_kind(self, exc, status_code):
        result = from_error(exc)

        assert isinstance(result, Failure)
        assert result.status_code == status_code
        assert result.message == exc.message

    def test_inventory_error_names_the_gift(self):
        exc = InventoryUnavailable("abc")

        assert exc.gift_id == "abc"
        assert "abc" in exc.message

    def test_state_transition_messages(self):
        assert InvalidStateTransition("delivered", "canceled").message == (
            "Cannot change order status from 'delivered' to 'canceled'"
        )
        assert InvalidStateTransition("preparing").message == "Order cannot be modified in 'preparing' status"
