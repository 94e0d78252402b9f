"""Composition root.

Every service and repository is constructed once, here, with explicit
constructor injection.  Views reach services only through
``get_container()``; tests build services directly with their own
collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from django.conf import settings

from modules.accounts.repositories import UserDjangoRepository
from modules.accounts.services import AccountService
from modules.core.validation import validate
from modules.gifts.repositories import GiftDjangoRepository
from modules.gifts.services import GiftService
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderLifecycleService, OrderPlacementService


@dataclass(frozen=True)
class Container:
    accounts: AccountService
    catalog: GiftService
    placement: OrderPlacementService
    lifecycle: OrderLifecycleService


@lru_cache(maxsize=1)
def get_container() -> Container:
    users = UserDjangoRepository()
    gifts = GiftDjangoRepository()
    orders = OrderDjangoRepository()
    return Container(
        accounts=AccountService(user_repository=users),
        catalog=GiftService(repository=gifts),
        placement=OrderPlacementService(
            order_repository=orders,
            gift_repository=gifts,
            validator=validate,
            default_delivery_minutes=settings.ORDERS_DEFAULT_DELIVERY_MINUTES,
        ),
        lifecycle=OrderLifecycleService(
            order_repository=orders,
            gift_repository=gifts,
            validator=validate,
            restock_on_cancel=settings.ORDERS_RESTOCK_ON_CANCEL,
        ),
    )
