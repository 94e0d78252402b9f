from modules.gifts.repositories.django_repository import GiftDjangoRepository
from modules.gifts.repositories.interfaces import IGiftRepository

__all__ = ["GiftDjangoRepository", "IGiftRepository"]
