"""User repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.accounts.dtos import AddressDTO, RegisterUserDTO
    from modules.accounts.models import User


class IUserRepository(IRepository["User"]):
    """Repository contract for the User aggregate (user + saved addresses)."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by lower-cased e-mail."""

    @abstractmethod
    def create(self, dto: RegisterUserDTO) -> User:
        """Create a user and its addresses atomically, hashing the password."""

    @abstractmethod
    def add_addresses(self, user: User, addresses: List[AddressDTO]) -> None:
        """Attach saved addresses to *user*."""
