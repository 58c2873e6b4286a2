# rentalhub/db/crud_identity.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rentalhub.db.models import Booking, Identity


async def get_identity(db: AsyncSession, identity_id: int) -> Optional[Identity]:
    res = await db.execute(select(Identity).where(Identity.id == identity_id))
    return res.scalar_one_or_none()


async def get_latest_identity_for_user(
    db: AsyncSession,
    user_id: int,
) -> Optional[Identity]:
    """
    The renter's authoritative record: booking gating, booking reads and the
    status endpoints all go through here. Most recent upload wins; id breaks
    ties between rows created in the same instant.
    """
    stmt = (
        select(Identity)
        .where(Identity.user_id == user_id)
        .order_by(Identity.created_at.desc(), Identity.id.desc())
        .limit(1)
    )
    res = await db.execute(stmt)
    return res.scalars().first()


async def list_pending_identities(db: AsyncSession) -> List[Identity]:
    """
    Admin review queue: oldest upload first, owner loaded for name/email.
    """
    stmt = (
        select(Identity)
        .options(selectinload(Identity.user))
        .where(Identity.status == "pending")
        .order_by(Identity.created_at.asc(), Identity.id.asc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def create_identity(db: AsyncSession, *, user_id: int, document_url: str) -> Identity:
    identity = Identity(
        user_id=user_id,
        document_url=document_url,
        verified=False,
        status="pending",
        reason=None,
        verified_at=None,
    )
    db.add(identity)
    await db.commit()
    await db.refresh(identity)
    return identity


async def reset_identity(db: AsyncSession, identity: Identity, *, document_url: str) -> Identity:
    """
    New document for an existing record: back to pending, previous decision cleared.
    """
    identity.document_url = document_url
    identity.status = "pending"
    identity.verified = False
    identity.reason = None
    identity.verified_at = None
    db.add(identity)
    await db.commit()
    await db.refresh(identity)
    return identity


async def set_identity_decision(
    db: AsyncSession,
    identity: Identity,
    *,
    decision: str,
    reason: Optional[str],
    decided_at: datetime,
) -> Identity:
    """
    Stamp approved/rejected on the record and copy the new status onto every
    booking of the same renter. Both writes commit together.
    """
    if decision == "approved":
        identity.status = "approved"
        identity.verified = True
        identity.verified_at = decided_at
        identity.reason = None
    else:
        identity.status = "rejected"
        identity.verified = False
        identity.verified_at = None
        identity.reason = reason
    db.add(identity)

    await db.execute(
        update(Booking)
        .where(Booking.user_id == identity.user_id)
        .values(identity_status=identity.status)
    )
    await db.commit()
    await db.refresh(identity)
    return identity
