# rentalhub/db/crud_bookings.py

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rentalhub.core.errors import Internal
from rentalhub.db.crud_identity import get_latest_identity_for_user
from rentalhub.db.models import Booking, BookingCustomer, BookingItem, Identity, Item

logger = logging.getLogger("uvicorn.error")


@dataclass
class BookingAggregate:
    booking: Booking
    items: List[BookingItem]
    customer: Optional[BookingCustomer]
    # renter's current identity record, not the one referenced at creation
    identity: Optional[Identity]


async def list_items_by_ids(db: AsyncSession, item_ids: List[int]) -> Dict[int, Item]:
    res = await db.execute(select(Item).where(Item.id.in_(item_ids)))
    return {item.id: item for item in res.scalars().all()}


async def create_booking_aggregate(
    db: AsyncSession,
    *,
    booking: Booking,
    items: List[BookingItem],
    customer: BookingCustomer,
) -> BookingAggregate:
    """
    Insert booking header, lines and renter snapshot in one transaction.

    Any failure rolls back all three and surfaces as Internal; nothing
    partial is left behind. On success the aggregate is read back.
    """
    try:
        db.add(booking)
        await db.flush()

        for item in items:
            item.booking_id = booking.id
        db.add_all(items)
        await db.flush()

        customer.booking_id = booking.id
        db.add(customer)
        await db.flush()

        await db.commit()
    except SQLAlchemyError:
        logger.exception("create_booking_aggregate: transaction failed for user %s", booking.user_id)
        await db.rollback()
        raise Internal()

    logger.info("create_booking_aggregate: booking %s created", booking.id)

    try:
        aggregate = await get_booking_aggregate(db, booking.id)
    except SQLAlchemyError:
        logger.exception("create_booking_aggregate: read-back failed for booking %s", booking.id)
        raise Internal()
    if aggregate is None:
        # committed but unreadable: treat as storage failure
        logger.error("create_booking_aggregate: booking %s missing after commit", booking.id)
        raise Internal()
    return aggregate


async def get_booking(db: AsyncSession, booking_id: int) -> Optional[Booking]:
    stmt = (
        select(Booking)
        .options(selectinload(Booking.items), selectinload(Booking.customer))
        .where(Booking.id == booking_id)
        .execution_options(populate_existing=True)
    )
    res = await db.execute(stmt)
    return res.scalars().first()


async def get_booking_aggregate(db: AsyncSession, booking_id: int) -> Optional[BookingAggregate]:
    booking = await get_booking(db, booking_id)
    if booking is None:
        return None

    identity = await get_latest_identity_for_user(db, booking.user_id)
    return BookingAggregate(
        booking=booking,
        items=list(booking.items),
        customer=booking.customer,
        identity=identity,
    )


def _summarize(booking: Booking) -> Dict[str, Any]:
    return {
        "booking_id": booking.id,
        "start_date": booking.start_date,
        "end_date": booking.end_date,
        "total": booking.total,
        "status": booking.status,
        "item_names": ", ".join(item.name for item in booking.items),
        "total_items": sum(item.quantity for item in booking.items),
        "customer_name": booking.customer.name if booking.customer else "",
        "created_at": booking.created_at,
    }


async def list_booking_summaries_for_user(db: AsyncSession, user_id: int) -> List[Dict[str, Any]]:
    """
    One row per booking of the renter, newest first, with line names joined
    and quantities summed.
    """
    stmt = (
        select(Booking)
        .options(selectinload(Booking.items), selectinload(Booking.customer))
        .where(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    res = await db.execute(stmt)
    return [_summarize(b) for b in res.scalars().all()]


async def list_booking_summaries_for_host(db: AsyncSession, host_id: int) -> List[Dict[str, Any]]:
    """
    All bookings whose items belong to host_id.
    """
    stmt = (
        select(Booking)
        .options(selectinload(Booking.items), selectinload(Booking.customer))
        .where(Booking.host_id == host_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    res = await db.execute(stmt)
    return [_summarize(b) for b in res.scalars().all()]


def _completeness(booking: Booking) -> tuple:
    return (
        booking.customer is not None and booking.identity_id is not None,
        booking.identity_id is not None,
    )


def _customer_row(booking: Booking) -> Dict[str, Any]:
    contact = booking.customer
    identity = booking.identity
    return {
        "user_id": booking.user_id,
        "name": contact.name if contact else "",
        "email": contact.email if contact else "",
        "phone": contact.phone if contact else "",
        "identity_id": booking.identity_id,
        "identity_status": identity.status if identity else None,
        "document_url": identity.document_url if identity else None,
        "reason": identity.reason if identity else None,
        "uploaded_at": (
            identity.created_at if identity else (contact.created_at if contact else None)
        ),
    }


async def list_customers_for_host(db: AsyncSession, host_id: int) -> List[Dict[str, Any]]:
    """
    One row per renter who has booked with host_id, ordered by renter id.

    Contact details come from the booking snapshot and identity fields from
    the record that booking referenced. When a renter has several bookings,
    one carrying both a snapshot and an identity reference wins, then one
    with an identity reference, then the newest.
    """
    stmt = (
        select(Booking)
        .options(selectinload(Booking.customer), selectinload(Booking.identity))
        .where(Booking.host_id == host_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .execution_options(populate_existing=True)
    )
    res = await db.execute(stmt)

    chosen: Dict[int, Booking] = {}
    for booking in res.scalars().all():
        current = chosen.get(booking.user_id)
        if current is None or _completeness(booking) > _completeness(current):
            chosen[booking.user_id] = booking

    return [_customer_row(chosen[user_id]) for user_id in sorted(chosen)]
