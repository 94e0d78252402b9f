"""Account service layer (registration and login)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog
from django.db import transaction
from rest_framework_simplejwt.tokens import RefreshToken

from modules.accounts.exceptions import EmailAlreadyRegistered, InvalidCredentials
from modules.core.exceptions import NotFound

if TYPE_CHECKING:
    from modules.accounts.dtos import LoginDTO, RegisterUserDTO
    from modules.accounts.models import User
    from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class IssuedTokens:
    access: str
    refresh: str


class AccountService:
    """Application service for User use-cases."""

    def __init__(self, user_repository: IUserRepository) -> None:
        self._repo = user_repository

    @transaction.atomic
    def register(self, dto: RegisterUserDTO) -> User:
        """Create a user account.

        Raises:
            EmailAlreadyRegistered: the e-mail is taken.
        """
        if self._repo.get_by_email(dto.email):
            logger.warning("user.duplicate_email")
            raise EmailAlreadyRegistered()
        return self._repo.create(dto)

    def login(self, dto: LoginDTO) -> tuple[User, IssuedTokens]:
        """Check credentials and issue a JWT pair.

        Unknown e-mail and wrong password are indistinguishable to the caller.

        Raises:
            InvalidCredentials: unknown e-mail, wrong password or inactive user.
        """
        user = self._repo.get_by_email(dto.email)
        if user is None or not user.is_active or not user.check_password(dto.password):
            logger.warning("user.login_failed")
            raise InvalidCredentials()

        refresh = RefreshToken.for_user(user)
        logger.info("user.logged_in", user_id=str(user.id))
        return user, IssuedTokens(access=str(refresh.access_token), refresh=str(refresh))

    def get_user(self, user_id: str) -> User:
        user = self._repo.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return user
