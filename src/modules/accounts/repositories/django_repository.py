"""Django ORM implementation of the User repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.accounts.dtos import AddressDTO, RegisterUserDTO
from modules.accounts.models import Address, User
from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserDjangoRepository(IUserRepository):
    """Concrete User repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[User]:
        try:
            return User.objects.prefetch_related("addresses").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_email(self, email: str) -> Optional[User]:
        return User.objects.filter(email=email.strip().lower()).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[User]:
        queryset = User.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: User) -> User:
        entity.save()
        return entity

    @transaction.atomic
    def create(self, dto: RegisterUserDTO) -> User:
        user = User.objects.create_user(
            email=dto.email,
            password=dto.password,
            name=dto.name,
            phone=dto.phone,
        )
        self.add_addresses(user, dto.addresses)
        logger.info("user.created", user_id=str(user.id), address_count=len(dto.addresses))
        return user

    def add_addresses(self, user: User, addresses: List[AddressDTO]) -> None:
        Address.objects.bulk_create(
            [
                Address(
                    user=user,
                    type=address.type,
                    address=address.address,
                    city=address.city,
                    state=address.state,
                    zip_code=address.zip_code,
                    is_default=address.is_default,
                )
                for address in addresses
            ]
        )
