"""Correlation id propagation through API requests and their log lines."""

from __future__ import annotations

import logging

import pytest

pytestmark = pytest.mark.integration


def test_request_id_echoed_on_api_errors(api_client_with_correlation):
    client, cid = api_client_with_correlation

    response = client.get("/api/v1/orders/")

    assert response.status_code == 401
    assert response["X-Request-ID"] == cid


def test_service_logs_carry_correlation_id(auth_client, gift, order_payload, caplog):
    cid = "order-flow-correlation-789"

    with caplog.at_level(logging.INFO):
        response = auth_client.post(
            "/api/v1/orders/", order_payload([(gift, 1, "10")]), format="json", HTTP_X_REQUEST_ID=cid
        )

    assert response.status_code == 201
    placed = [record.getMessage() for record in caplog.records if "order.placed" in record.getMessage()]
    assert placed and all(cid in message for message in placed)


def test_passwords_never_reach_the_logs(api_client, caplog):
    with caplog.at_level(logging.DEBUG):
        api_client.post(
            "/api/v1/auth/login/", {"email": "ghost@example.com", "password": "pa55word-xyz"}, format="json"
        )

    assert all("pa55word-xyz" not in record.getMessage() for record in caplog.records)
