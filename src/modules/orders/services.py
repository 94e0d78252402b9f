"""Order service layer (use cases).

``OrderPlacementService`` turns a cart into an order.  Everything that can
be rejected without the database (schema, monetary consistency) is checked
first; then one ``transaction.atomic()`` block reserves stock for every line
and inserts the order, its lines and its first tracking event.  Any failure
inside the block rolls the whole unit back.

``OrderLifecycleService`` owns every later change: customer edits and
cancellations, staff status transitions, and the owner-only queries.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

import structlog
from django.db import DatabaseError, transaction
from django.utils import timezone

from modules.core.exceptions import AccessDenied, TransactionAborted, Unauthenticated, ValidationFailed
from modules.core.validation import validate
from modules.orders.constants import (
    CUSTOMER_CANCELLATION_DESCRIPTION,
    TRACKING_DESCRIPTIONS,
    OrderStatus,
)
from modules.orders.dtos import PlaceOrderDTO, UpdateOrderDTO
from modules.orders.events import OrderCanceled, OrderStatusChanged
from modules.orders.exceptions import InvalidStateTransition, InventoryUnavailable, OrderNotFound
from modules.orders.invariants import AMOUNT_MISMATCH_MESSAGE, amounts_consistent

if TYPE_CHECKING:
    from modules.gifts.repositories.interfaces import IGiftRepository
    from modules.orders.dtos import DeliveryPartnerDTO, OrderLineDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

Validator = Callable[..., Any]
Clock = Callable[[], datetime]


class OrderPlacementService:
    """Places orders with all-or-nothing stock reservation.

    Receives repositories and the validation collaborator via constructor
    injection.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        gift_repository: IGiftRepository,
        validator: Validator = validate,
        default_delivery_minutes: int = 60,
        clock: Clock = timezone.now,
    ) -> None:
        self._order_repo = order_repository
        self._gift_repo = gift_repository
        self._validate = validator
        self._default_delivery = timedelta(minutes=default_delivery_minutes)
        self._clock = clock

    def place_order(self, caller_id: Optional[str], payload: Any) -> Order:
        """Validate a cart, reserve stock and persist the order.

        The owner is always the caller; ``user``, ``status`` and ``tracking``
        in the payload are ignored.

        Raises:
            Unauthenticated: no caller (checked before any database access).
            ValidationFailed: schema error or inconsistent amounts.
            InventoryUnavailable: a line's gift is missing or short on stock.
            TransactionAborted: the database failed mid-transaction.
        """
        if not caller_id:
            raise Unauthenticated()

        log = logger.bind(user_id=str(caller_id))

        validation = self._validate(PlaceOrderDTO, payload)
        if not validation.success:
            log.info("order.validation_failed", fields=sorted(validation.errors))
            raise ValidationFailed(validation.errors)
        dto: PlaceOrderDTO = validation.data

        lines = [(line.price, line.quantity) for line in dto.items]
        if not amounts_consistent(lines, dto.delivery_fee, dto.tax, dto.discount, dto.total_amount):
            log.info("order.amount_mismatch", total_amount=str(dto.total_amount))
            raise ValidationFailed({"totalAmount": AMOUNT_MISMATCH_MESSAGE})

        delivery_time = dto.delivery_time or self._clock() + self._default_delivery

        try:
            with transaction.atomic():
                self._reserve(dto.items, log)
                order = self._order_repo.create(str(caller_id), dto, delivery_time)
        except InventoryUnavailable as exc:
            log.warning("order.inventory_unavailable", gift_id=exc.gift_id)
            raise
        except DatabaseError:
            log.exception("order.transaction_aborted")
            raise TransactionAborted()

        log.info(
            "order.placed",
            order_id=str(order.id),
            item_count=len(dto.items),
            total_amount=str(order.total_amount),
        )
        return order

    def _reserve(self, items: Iterable[OrderLineDTO], log: Any) -> None:
        """Reserve stock per gift, in gift-id order, inside the caller's transaction."""
        quantities: Counter = Counter()
        for line in items:
            quantities[str(line.gift)] += line.quantity

        for gift_id in sorted(quantities):
            if not self._gift_repo.reserve_stock(gift_id, quantities[gift_id]):
                raise InventoryUnavailable(gift_id)
            log.debug("order.stock_reserved", gift_id=gift_id, quantity=quantities[gift_id])


class OrderLifecycleService:
    """Customer edits, cancellations, staff transitions and order queries."""

    def __init__(
        self,
        order_repository: IOrderRepository,
        gift_repository: IGiftRepository,
        validator: Validator = validate,
        restock_on_cancel: bool = False,
        clock: Clock = timezone.now,
    ) -> None:
        self._order_repo = order_repository
        self._gift_repo = gift_repository
        self._validate = validator
        self._restock_on_cancel = restock_on_cancel
        self._clock = clock

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, caller_id: Optional[str], order_id: str) -> Order:
        """Return the caller's order.

        Raises:
            Unauthenticated, OrderNotFound, AccessDenied.
        """
        if not caller_id:
            raise Unauthenticated()
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound()
        if str(order.user_id) != str(caller_id):
            logger.warning("order.access_denied", order_id=str(order_id), user_id=str(caller_id))
            raise AccessDenied()
        return order

    def get_tracking(self, caller_id: Optional[str], order_id: str) -> Order:
        order = self.get_order(caller_id, order_id)
        logger.info("order.tracked", order_id=str(order.id), status=order.status)
        return order

    def list_orders(self, caller_id: Optional[str], status: Optional[str] = None):
        """The caller's orders, newest first (a queryset, paginated by the view)."""
        if not caller_id:
            raise Unauthenticated()
        return self._order_repo.list_for_user(str(caller_id), status=status)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def update_order(self, caller_id: Optional[str], order_id: str, patch: Any) -> Order:
        """Apply a customer patch to a ``pending`` or ``confirmed`` order.

        ``specialInstructions`` replaces the current text.  ``status`` may
        only be ``"canceled"``; it appends a tracking event described by
        ``cancellationReason`` (or a default) and, when restocking is
        enabled, returns every line's quantity to its gift.

        Lookup, ownership and state are checked before the patch is validated.

        Raises:
            Unauthenticated: no caller.
            OrderNotFound: unknown order.
            AccessDenied: the caller does not own the order.
            InvalidStateTransition: the order is past ``confirmed``.
            ValidationFailed: malformed patch.
            TransactionAborted: the database failed mid-transaction.
        """
        if not caller_id:
            raise Unauthenticated()

        log = logger.bind(order_id=str(order_id), user_id=str(caller_id))

        try:
            with transaction.atomic():
                order = self._order_repo.get_for_update(order_id)
                if order is None:
                    raise OrderNotFound()
                if str(order.user_id) != str(caller_id):
                    log.warning("order.access_denied")
                    raise AccessDenied()
                if not order.is_mutable:
                    log.info("order.update_rejected", status=order.status)
                    raise InvalidStateTransition(order.status)

                validation = self._validate(UpdateOrderDTO, patch)
                if not validation.success:
                    raise ValidationFailed(validation.errors)
                dto: UpdateOrderDTO = validation.data

                if dto.special_instructions is not None:
                    order.special_instructions = dto.special_instructions
                if dto.status == OrderStatus.CANCELED:
                    self._cancel(order, dto.cancellation_reason or CUSTOMER_CANCELLATION_DESCRIPTION)

                self._order_repo.save(order)
        except DatabaseError:
            log.exception("order.transaction_aborted")
            raise TransactionAborted()

        log.info("order.updated", status=order.status)
        return self._order_repo.get_by_id(order.id)

    def advance_status(
        self,
        order_id: str,
        new_status: str,
        description: Optional[str] = None,
        delivery_partner: Optional[DeliveryPartnerDTO] = None,
    ) -> Order:
        """Apply one state-machine transition (staff only, enforced by the view).

        Raises:
            OrderNotFound: unknown order.
            InvalidStateTransition: the transition is not allowed.
            TransactionAborted: the database failed mid-transaction.
        """
        log = logger.bind(order_id=str(order_id))
        try:
            with transaction.atomic():
                order = self._order_repo.get_for_update(order_id)
                if order is None:
                    raise OrderNotFound()
                if not order.can_transition_to(new_status):
                    log.info("order.transition_rejected", current=order.status, target=str(new_status))
                    raise InvalidStateTransition(order.status, str(new_status))

                if delivery_partner is not None:
                    order.partner_name = delivery_partner.name
                    order.partner_phone = delivery_partner.phone
                    location = delivery_partner.current_location
                    order.partner_lat = location.lat if location else None
                    order.partner_lng = location.lng if location else None

                old_status = order.status
                if new_status == OrderStatus.CANCELED:
                    self._cancel(order, description or TRACKING_DESCRIPTIONS[OrderStatus.CANCELED])
                else:
                    order.status = new_status
                    self._order_repo.append_tracking(
                        order, new_status, description or TRACKING_DESCRIPTIONS[new_status], self._clock()
                    )
                    order.add_domain_event(
                        OrderStatusChanged(
                            aggregate_id=order.id,
                            old_status=str(old_status),
                            new_status=str(new_status),
                        )
                    )
                self._order_repo.save(order)
        except DatabaseError:
            log.exception("order.transaction_aborted")
            raise TransactionAborted()

        log.info("order.status_advanced", old_status=str(old_status), new_status=str(new_status))
        return self._order_repo.get_by_id(order.id)

    def _cancel(self, order: Order, description: str) -> None:
        order.status = OrderStatus.CANCELED
        self._order_repo.append_tracking(order, OrderStatus.CANCELED, description, self._clock())

        if self._restock_on_cancel:
            for item in sorted(order.items.all(), key=lambda item: str(item.gift_id)):
                self._gift_repo.release_stock(str(item.gift_id), item.quantity)

        order.add_domain_event(
            OrderCanceled(aggregate_id=order.id, reason=description, restocked=self._restock_on_cancel)
        )
