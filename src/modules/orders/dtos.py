"""Order DTOs for the Service Layer.

Pydantic v2 contracts between the API layer and the order services.  DTOs
are immutable (``frozen=True``), read camelCase wire names and ignore
unknown keys, which is how caller-supplied ``user``, ``status`` and
``tracking`` fields on a new order are dropped.

- ``PlaceOrderDTO``: a new order (recipient, lines, address, payment).
- ``UpdateOrderDTO``: customer patch (instructions, cancellation).
- ``AdvanceStatusDTO``: staff forward transition.

The amount invariant is not checked here; see ``modules.orders.invariants``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from modules.gifts.models import GiftGender
from modules.orders.constants import OrderStatus, PaymentMethod, PaymentStatus


# Same bounds as the money and quantity columns on Order and OrderItem.
MONEY = dict(max_digits=10, decimal_places=2)
MAX_QUANTITY = 2_147_483_647


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


class RecipientDTO(_WireModel):
    name: str = Field(min_length=2)
    age: int = Field(ge=0)
    gender: GiftGender
    occasion: Optional[str] = None


class OrderLineDTO(_WireModel):
    """One cart line.  ``price`` is the unit price the client was shown."""

    gift: UUID
    quantity: int = Field(ge=1, le=MAX_QUANTITY)
    price: Decimal = Field(ge=0, **MONEY)


class DeliveryAddressDTO(_WireModel):
    address: str = Field(min_length=5)
    city: str = Field(min_length=2)
    state: str = Field(min_length=2)
    zip_code: str = Field(pattern=r"^\d{5,6}$")


class PaymentInfoDTO(_WireModel):
    method: PaymentMethod
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: Optional[str] = None


class LocationDTO(_WireModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class DeliveryPartnerDTO(_WireModel):
    name: str = Field(min_length=1)
    phone: str = Field(pattern=r"^\d{10}$")
    current_location: Optional[LocationDTO] = None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class PlaceOrderDTO(_WireModel):
    recipient: RecipientDTO
    items: List[OrderLineDTO] = Field(min_length=1)
    delivery_address: DeliveryAddressDTO
    payment_info: PaymentInfoDTO
    delivery_time: Optional[datetime] = None
    special_instructions: Optional[str] = None
    total_amount: Decimal = Field(gt=0, **MONEY)
    delivery_fee: Decimal = Field(ge=0, **MONEY)
    tax: Decimal = Field(ge=0, **MONEY)
    discount: Decimal = Field(default=Decimal("0"), ge=0, **MONEY)


class UpdateOrderDTO(_WireModel):
    """Customer patch.  ``canceled`` is the only status a customer may set."""

    special_instructions: Optional[str] = None
    status: Optional[Literal["canceled"]] = None
    cancellation_reason: Optional[str] = None


class AdvanceStatusDTO(_WireModel):
    status: OrderStatus
    description: Optional[str] = None
    delivery_partner: Optional[DeliveryPartnerDTO] = None
