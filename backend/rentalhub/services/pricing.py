# rentalhub/services/pricing.py
"""
Booking price arithmetic. Pure functions, no I/O.

All amounts are non-negative integers in the smallest currency unit.
"""
from dataclasses import dataclass
from typing import Iterable, Protocol

from rentalhub.core.errors import InvalidArgument


class PricedLine(Protocol):
    subtotal_rental: int
    subtotal_deposit: int


@dataclass(frozen=True)
class PriceBreakdown:
    rental: int
    deposit: int
    discount: int
    total: int
    outstanding: int


def line_subtotals(
    *,
    price_per_day: int,
    deposit_per_unit: int,
    quantity: int,
    total_days: int,
) -> tuple[int, int]:
    """Return (subtotal_rental, subtotal_deposit) for one cart line."""
    if quantity < 1:
        raise InvalidArgument("quantity must be at least 1")
    if total_days < 0:
        raise InvalidArgument("total days cannot be negative")
    return price_per_day * quantity * total_days, deposit_per_unit * quantity


def price(lines: Iterable[PricedLine], discount: int = 0) -> PriceBreakdown:
    """
    rental and deposit are the sums of the line subtotals,
    total = rental + deposit - discount, outstanding = total at creation.

    A discount larger than rental + deposit is refused, not clamped.
    """
    if discount < 0:
        raise InvalidArgument("discount cannot be negative")

    rental = 0
    deposit = 0
    for line in lines:
        if line.subtotal_rental < 0 or line.subtotal_deposit < 0:
            raise InvalidArgument("line subtotals cannot be negative")
        rental += line.subtotal_rental
        deposit += line.subtotal_deposit

    total = rental + deposit - discount
    if total < 0:
        raise InvalidArgument("discount exceeds booking total")

    return PriceBreakdown(
        rental=rental,
        deposit=deposit,
        discount=discount,
        total=total,
        outstanding=total,
    )
