"""Monetary consistency of an order.

    total_amount == sum(price * quantity) + delivery_fee + tax - discount

Compared with a strict tolerance of one cent on unrounded values; amounts
are quantised to two places only when persisted.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Tuple

from modules.orders.constants import AMOUNT_TOLERANCE

AMOUNT_MISMATCH_MESSAGE = "Total amount does not match the sum of items + delivery fee + tax - discount"

Line = Tuple[Decimal, int]


def expected_total(
    lines: Iterable[Line],
    delivery_fee: Decimal,
    tax: Decimal,
    discount: Decimal,
) -> Decimal:
    subtotal = sum((Decimal(price) * quantity for price, quantity in lines), Decimal("0"))
    return subtotal + Decimal(delivery_fee) + Decimal(tax) - Decimal(discount)


def amounts_consistent(
    lines: Iterable[Line],
    delivery_fee: Decimal,
    tax: Decimal,
    discount: Decimal,
    total_amount: Decimal,
) -> bool:
    expected = expected_total(lines, delivery_fee, tax, discount)
    return abs(expected - Decimal(total_amount)) < AMOUNT_TOLERANCE
