"""Gift API views.

Browsing and recommendations are public; catalog edits are staff only.
All ORM access goes through ``GiftService`` and its repository.
"""

from __future__ import annotations

from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from config.container import get_container
from modules.core.exceptions import DomainError
from modules.core.results import Invalid, Ok, from_error
from modules.core.validation import validate
from modules.gifts.dtos import GiftDTO, GiftPatchDTO, RecommendationQueryDTO
from modules.gifts.filters import GiftFilter
from modules.gifts.models import GiftGender
from modules.gifts.serializers import GiftSerializer

PUBLIC_ACTIONS = {"list", "retrieve", "recommend"}


class GiftViewSet(ListModelMixin, GenericViewSet):
    """Gift catalog endpoints.  Does not extend ``ModelViewSet``."""

    serializer_class = GiftSerializer
    filterset_class = GiftFilter
    filter_backends = [DjangoFilterBackend]

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]
        return [IsAdminUser()]

    @property
    def service(self):
        return get_container().catalog

    def get_queryset(self):
        return self.service.catalog()

    # ------------------------------------------------------------------
    # Public
    # ------------------------------------------------------------------

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/gifts/{pk}/"""
        try:
            gift = self.service.get_gift(pk)
        except DomainError as exc:
            return from_error(exc).to_response()
        return Ok(GiftSerializer(gift).data).to_response()

    @action(detail=False, methods=["get"], url_path="recommend")
    def recommend(self, request: Request) -> Response:
        """GET /api/v1/gifts/recommend/?age=&gender="""
        validation = validate(
            RecommendationQueryDTO,
            {
                "age": request.query_params.get("age", "0"),
                "gender": request.query_params.get("gender", GiftGender.UNISEX.value),
            },
        )
        if not validation.success:
            return Invalid(validation.errors).to_response()

        query = validation.data
        gifts = self.service.recommend(query)
        return Ok(
            {
                "gifts": GiftSerializer(gifts, many=True).data,
                "timestamp": timezone.now().isoformat(),
                "metadata": {"age": query.age, "gender": query.gender.value, "count": len(gifts)},
            }
        ).to_response()

    # ------------------------------------------------------------------
    # Staff
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/gifts/"""
        validation = validate(GiftDTO, request.data)
        if not validation.success:
            return Invalid(validation.errors).to_response()
        gift = self.service.create_gift(validation.data)
        return Ok(GiftSerializer(gift).data, status.HTTP_201_CREATED).to_response()

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/gifts/{pk}/"""
        return self._update(request, pk, partial=False)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/gifts/{pk}/"""
        return self._update(request, pk, partial=True)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/gifts/{pk}/ (soft delete)"""
        try:
            self.service.delete_gift(pk)
        except DomainError as exc:
            return from_error(exc).to_response()
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _update(self, request: Request, pk: str | None, partial: bool) -> Response:
        validation = validate(GiftPatchDTO if partial else GiftDTO, request.data)
        if not validation.success:
            return Invalid(validation.errors).to_response()
        try:
            gift = self.service.update_gift(pk, validation.data, partial=partial)
        except DomainError as exc:
            return from_error(exc).to_response()
        return Ok(GiftSerializer(gift).data).to_response()
