# rentalhub/services/reservations.py
"""
Reservation workflow: turns a cart into a priced, time-bounded booking.

Flow for create_reservation:
  1. resolve the renter's identity record under the configured policy
  2. count billable days
  3. snapshot catalog prices into lines, run the pricing calculator
  4. take the host from the first line (all lines must share it)
  5. stamp the hold expiry
  6. persist header + lines + renter snapshot atomically
  7. return the aggregate with minutes remaining computed fresh
"""
import logging
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rentalhub.core.clock import utcnow
from rentalhub.core.config import Settings, get_settings
from rentalhub.core.errors import Internal, InvalidArgument, NotFound, Unauthorized
from rentalhub.db import crud_bookings, crud_identity
from rentalhub.db.crud_bookings import BookingAggregate
from rentalhub.db.models import Booking, BookingCustomer, BookingItem, Identity
from rentalhub.schemas.auth import Principal
from rentalhub.schemas.booking import (
    BookingCreate,
    BookingCustomerOut,
    BookingDetail,
    BookingItemOut,
    BookingOut,
    BookingSummary,
    HostBookingSummary,
    HostCustomer,
)
from rentalhub.schemas.identity import IdentityOut
from rentalhub.services import booking_lock
from rentalhub.services.pricing import line_subtotals, price

logger = logging.getLogger("uvicorn.error")


def count_days(start: date, end: date, settings: Optional[Settings] = None) -> int:
    """
    Billable days between start and end.

    Inclusive counting makes a same-day rental one day; exclusive counting
    makes it zero. Either way the result is raised to BOOKING_MIN_BILLABLE_DAYS.
    """
    settings = settings or get_settings()
    if end < start:
        raise InvalidArgument("end_date must not be before start_date")
    days = (end - start).days
    if settings.BOOKING_COUNT_DAYS_INCLUSIVE:
        days += 1
    return max(days, settings.BOOKING_MIN_BILLABLE_DAYS)


def to_detail(aggregate: BookingAggregate, now: Optional[datetime] = None) -> BookingDetail:
    now = now or utcnow()
    booking = BookingOut.model_validate(aggregate.booking)
    booking.time_remaining_minutes = booking_lock.remaining(aggregate.booking.locked_until, now)
    return BookingDetail(
        booking=booking,
        items=[BookingItemOut.model_validate(i) for i in aggregate.items],
        customer=(
            BookingCustomerOut.model_validate(aggregate.customer)
            if aggregate.customer is not None
            else None
        ),
        identity=(
            IdentityOut.model_validate(aggregate.identity)
            if aggregate.identity is not None
            else None
        ),
    )


async def _resolve_identity(
    db: AsyncSession,
    renter_id: int,
    settings: Settings,
) -> Optional[Identity]:
    """
    Only the renter's latest record counts, under either policy.

    Policy "optional": attach it unless it was rejected.
    Policy "required": it must be approved.
    """
    latest = await crud_identity.get_latest_identity_for_user(db, renter_id)

    if settings.BOOKING_REQUIRE_VERIFIED_IDENTITY:
        if latest is not None and latest.status == "approved":
            return latest
        if latest is not None and latest.status == "rejected":
            if latest.reason:
                raise InvalidArgument(f"identity rejected - {latest.reason}")
            raise InvalidArgument("identity rejected, please upload a new document")
        raise InvalidArgument("identity verification required")

    if latest is None or latest.status == "rejected":
        return None
    return latest


async def create_reservation(
    db: AsyncSession,
    principal: Optional[Principal],
    payload: BookingCreate,
    *,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> BookingDetail:
    if principal is None:
        raise Unauthorized()
    settings = settings or get_settings()
    now = now or utcnow()

    if not payload.items:
        raise InvalidArgument("at least one item is required")
    if payload.start_date < now.date():
        raise InvalidArgument("start_date cannot be in the past")
    total_days = count_days(payload.start_date, payload.end_date, settings)

    try:
        identity = await _resolve_identity(db, principal.user_id, settings)
        catalog = await crud_bookings.list_items_by_ids(
            db, [line.item_id for line in payload.items]
        )
    except SQLAlchemyError:
        logger.exception("create_reservation: lookup failed for user %s", principal.user_id)
        raise Internal()

    lines: List[BookingItem] = []
    for line in payload.items:
        item = catalog.get(line.item_id)
        if item is None or not item.is_active:
            raise InvalidArgument(f"item {line.item_id} is not available")
        subtotal_rental, subtotal_deposit = line_subtotals(
            price_per_day=item.price_per_day,
            deposit_per_unit=item.deposit_per_unit,
            quantity=line.quantity,
            total_days=total_days,
        )
        lines.append(
            BookingItem(
                item_id=item.id,
                name=item.name,
                quantity=line.quantity,
                price_per_day=item.price_per_day,
                deposit_per_unit=item.deposit_per_unit,
                subtotal_rental=subtotal_rental,
                subtotal_deposit=subtotal_deposit,
            )
        )

    host_ids = {catalog[line.item_id].host_id for line in payload.items}
    if len(host_ids) > 1:
        raise InvalidArgument("all items in a booking must belong to the same host")
    host_id = catalog[payload.items[0].item_id].host_id

    breakdown = price(lines, payload.discount)

    booking = Booking(
        user_id=principal.user_id,
        host_id=host_id,
        identity_id=identity.id if identity is not None else None,
        identity_status=identity.status if identity is not None else None,
        status="pending",
        locked_until=booking_lock.lock(now, settings.BOOKING_LOCK_MINUTES),
        start_date=payload.start_date,
        end_date=payload.end_date,
        total_days=total_days,
        delivery_type=payload.delivery_type,
        rental=breakdown.rental,
        deposit=breakdown.deposit,
        discount=breakdown.discount,
        total=breakdown.total,
        outstanding=breakdown.outstanding,
    )
    contact = payload.customer
    customer = BookingCustomer(
        name=contact.name,
        phone=contact.phone,
        email=contact.email,
        delivery_address=contact.delivery_address.strip() or "N/A",
        notes=contact.notes,
    )

    aggregate = await crud_bookings.create_booking_aggregate(
        db, booking=booking, items=lines, customer=customer
    )
    logger.info(
        "create_reservation: booking %s for user %s, host %s, total %s",
        aggregate.booking.id,
        principal.user_id,
        host_id,
        breakdown.total,
    )
    return to_detail(aggregate, now)


async def _load_aggregate(db: AsyncSession, booking_id: int) -> Optional[BookingAggregate]:
    try:
        return await crud_bookings.get_booking_aggregate(db, booking_id)
    except SQLAlchemyError:
        logger.exception("booking lookup failed for id %s", booking_id)
        raise Internal()


async def get_reservation(
    db: AsyncSession,
    principal: Optional[Principal],
    booking_id: int,
    *,
    now: Optional[datetime] = None,
) -> BookingDetail:
    """
    Renter view. Someone else's booking is reported as missing.
    """
    if principal is None:
        raise Unauthorized()
    aggregate = await _load_aggregate(db, booking_id)
    if aggregate is None or aggregate.booking.user_id != principal.user_id:
        raise NotFound.of("booking")
    return to_detail(aggregate, now)


async def get_host_reservation(
    db: AsyncSession,
    principal: Optional[Principal],
    booking_id: int,
    *,
    now: Optional[datetime] = None,
) -> BookingDetail:
    if principal is None:
        raise Unauthorized()
    aggregate = await _load_aggregate(db, booking_id)
    if aggregate is None or aggregate.booking.host_id != principal.user_id:
        raise NotFound.of("booking")
    return to_detail(aggregate, now)


async def list_reservations(
    db: AsyncSession,
    principal: Optional[Principal],
) -> List[BookingSummary]:
    if principal is None:
        raise Unauthorized()
    try:
        rows = await crud_bookings.list_booking_summaries_for_user(db, principal.user_id)
    except SQLAlchemyError:
        logger.exception("booking listing failed for user %s", principal.user_id)
        raise Internal()
    return [BookingSummary.model_validate(r) for r in rows]


async def list_host_reservations(
    db: AsyncSession,
    principal: Optional[Principal],
) -> List[HostBookingSummary]:
    if principal is None:
        raise Unauthorized()
    try:
        rows = await crud_bookings.list_booking_summaries_for_host(db, principal.user_id)
    except SQLAlchemyError:
        logger.exception("booking listing failed for host %s", principal.user_id)
        raise Internal()
    return [HostBookingSummary.model_validate(r) for r in rows]


async def list_host_customers(
    db: AsyncSession,
    principal: Optional[Principal],
) -> List[HostCustomer]:
    """Distinct renters who have booked with the calling host."""
    if principal is None:
        raise Unauthorized()
    try:
        rows = await crud_bookings.list_customers_for_host(db, principal.user_id)
    except SQLAlchemyError:
        logger.exception("customer listing failed for host %s", principal.user_id)
        raise Internal()
    return [HostCustomer.model_validate(r) for r in rows]
