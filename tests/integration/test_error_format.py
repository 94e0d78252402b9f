"""Every error response uses the ``{"success": false, ...}`` envelope."""

from __future__ import annotations

import pytest
from rest_framework.throttling import ScopedRateThrottle

pytestmark = pytest.mark.integration


class TestErrorEnvelope:
    def test_drf_authentication_error(self, api_client):
        response = api_client.get("/api/v1/orders/")

        body = response.json()
        assert response.status_code == 401
        assert body["success"] is False
        assert body["kind"] == "unauthenticated"
        assert body["error"]

    def test_malformed_json_body(self, auth_client):
        response = auth_client.post("/api/v1/orders/", data="{not json", content_type="application/json")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_non_object_body_is_validation_error(self, auth_client):
        response = auth_client.post("/api/v1/orders/", [1, 2, 3], format="json")

        assert response.status_code == 400
        assert "_error" in response.json()["errors"]

    def test_throttled_requests_use_envelope(self, auth_client, monkeypatch, gift, order_payload):
        rates = dict(ScopedRateThrottle.THROTTLE_RATES, order_placement="1/minute")
        monkeypatch.setattr(ScopedRateThrottle, "THROTTLE_RATES", rates)

        first = auth_client.post("/api/v1/orders/", order_payload([(gift, 1, "10")]), format="json")
        second = auth_client.post("/api/v1/orders/", order_payload([(gift, 1, "10")]), format="json")

        assert first.status_code == 201
        assert second.status_code == 429
        assert second.json()["kind"] == "throttled"

    def test_order_listing_uses_a_separate_rate(self, auth_client, monkeypatch, gift, order_payload):
        rates = dict(ScopedRateThrottle.THROTTLE_RATES, order_placement="1/minute")
        monkeypatch.setattr(ScopedRateThrottle, "THROTTLE_RATES", rates)
        auth_client.post("/api/v1/orders/", order_payload([(gift, 1, "10")]), format="json")

        for _ in range(3):
            assert auth_client.get("/api/v1/orders/").status_code == 200
