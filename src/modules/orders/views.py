"""Order API views.

Exposes the placement and lifecycle services over HTTP.  Domain errors are
caught at this boundary and rendered through ``modules.core.results``; the
view never swallows generic exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from config.container import get_container
from modules.core.authentication import resolve_caller_id
from modules.core.exceptions import DomainError
from modules.core.results import Invalid, Ok, from_error
from modules.core.validation import validate
from modules.orders.dtos import AdvanceStatusDTO
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.serializers import OrderSerializer, OrderTrackingSerializer

THROTTLE_SCOPES = {
    "create": "order_placement",
    "list": "order_listing",
    "retrieve": "order_listing",
    "track": "order_listing",
}


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Does **not** extend ``ModelViewSet``: all ORM access goes through the
    services and their repositories.
    """

    queryset = Order.objects.none()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]

    def get_permissions(self):
        if self.action == "advance":
            return [IsAdminUser()]
        return [IsAuthenticated()]

    def get_throttles(self) -> list[BaseThrottle]:
        self.throttle_scope = THROTTLE_SCOPES.get(self.action)
        return super().get_throttles()

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Order.objects.none()
        return get_container().lifecycle.list_orders(resolve_caller_id(self.request))

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        try:
            order = get_container().placement.place_order(resolve_caller_id(request), request.data)
        except DomainError as exc:
            return from_error(exc).to_response()
        return Ok(OrderSerializer(order).data, status.HTTP_201_CREATED).to_response()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?status=&page=&limit="""
        try:
            queryset = self.filter_queryset(self.get_queryset())
        except DomainError as exc:
            return from_error(exc).to_response()
        page = self.paginate_queryset(queryset)
        serializer = OrderSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = get_container().lifecycle.get_order(resolve_caller_id(request), pk)
        except DomainError as exc:
            return from_error(exc).to_response()
        return Ok(OrderSerializer(order).data).to_response()

    @action(detail=True, methods=["get"])
    def track(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/track/"""
        try:
            order = get_container().lifecycle.get_tracking(resolve_caller_id(request), pk)
        except DomainError as exc:
            return from_error(exc).to_response()
        return Ok(OrderTrackingSerializer(order).data).to_response()

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/orders/{pk}/

        Accepts ``specialInstructions`` and ``status: "canceled"`` (with an
        optional ``cancellationReason``).
        """
        try:
            order = get_container().lifecycle.update_order(resolve_caller_id(request), pk, request.data)
        except DomainError as exc:
            return from_error(exc).to_response()
        return Ok(OrderSerializer(order).data).to_response()

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    @action(detail=True, methods=["post"], url_path="status")
    def advance(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/status/ (staff)"""
        validation = validate(AdvanceStatusDTO, request.data)
        if not validation.success:
            return Invalid(validation.errors).to_response()
        dto = validation.data
        try:
            order = get_container().lifecycle.advance_status(
                pk,
                dto.status,
                description=dto.description,
                delivery_partner=dto.delivery_partner,
            )
        except DomainError as exc:
            return from_error(exc).to_response()
        return Ok(OrderSerializer(order).data).to_response()
