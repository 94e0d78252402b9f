"""Account API views: register, login, current user."""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from config.container import get_container
from modules.accounts.dtos import LoginDTO, RegisterUserDTO
from modules.accounts.serializers import UserSerializer
from modules.core.authentication import resolve_caller_id
from modules.core.exceptions import DomainError
from modules.core.results import Invalid, Ok, from_error
from modules.core.validation import validate


class RegisterView(APIView):
    """POST /api/v1/auth/register/"""

    permission_classes = [AllowAny]
    throttle_scope = "auth"

    def post(self, request: Request) -> Response:
        validation = validate(RegisterUserDTO, request.data)
        if not validation.success:
            return Invalid(validation.errors).to_response()
        try:
            user = get_container().accounts.register(validation.data)
        except DomainError as exc:
            return from_error(exc).to_response()
        return Ok(UserSerializer(user).data, status.HTTP_201_CREATED).to_response()


class LoginView(APIView):
    """POST /api/v1/auth/login/

    Returns the user plus a SimpleJWT access/refresh pair.
    """

    permission_classes = [AllowAny]
    authentication_classes: list = []
    throttle_scope = "auth"

    def post(self, request: Request) -> Response:
        validation = validate(LoginDTO, request.data)
        if not validation.success:
            return Invalid(validation.errors).to_response()
        try:
            user, tokens = get_container().accounts.login(validation.data)
        except DomainError as exc:
            return from_error(exc).to_response()
        return Ok(
            {
                "user": UserSerializer(user).data,
                "token": tokens.access,
                "refresh": tokens.refresh,
            }
        ).to_response()


class MeView(APIView):
    """GET /api/v1/auth/me/"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        try:
            user = get_container().accounts.get_user(resolve_caller_id(request))
        except DomainError as exc:
            return from_error(exc).to_response()
        return Ok(UserSerializer(user).data).to_response()
