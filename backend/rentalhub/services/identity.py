# rentalhub/services/identity.py
"""
Renter identity verification lifecycle.

    none --submit--> pending --decide--> approved | rejected
    rejected --resubmit--> pending

An approved record is final for the renter: submit and resubmit both
fail with Conflict. Reviewers may still re-decide any record.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rentalhub.core.clock import utcnow
from rentalhub.core.errors import Conflict, Internal, InvalidArgument, NotFound, Unauthorized
from rentalhub.db import crud_identity
from rentalhub.db.models import Identity
from rentalhub.schemas.auth import Principal
from rentalhub.schemas.identity import IdentityOut, IdentityReviewItem

logger = logging.getLogger("uvicorn.error")

DECISIONS = ("approved", "rejected")


def _require_principal(principal: Optional[Principal]) -> Principal:
    if principal is None:
        raise Unauthorized()
    return principal


def _require_document_url(document_url: str) -> str:
    document_url = (document_url or "").strip()
    if not document_url:
        raise InvalidArgument("document_url is required")
    return document_url


async def _latest(db: AsyncSession, user_id: int) -> Optional[Identity]:
    try:
        return await crud_identity.get_latest_identity_for_user(db, user_id)
    except SQLAlchemyError:
        logger.exception("identity lookup failed for user %s", user_id)
        raise Internal()


async def submit(db: AsyncSession, principal: Optional[Principal], document_url: str) -> Identity:
    """
    First upload creates a pending record; a later upload over a pending or
    rejected record replaces the document and resets it to pending.
    """
    principal = _require_principal(principal)
    document_url = _require_document_url(document_url)

    existing = await _latest(db, principal.user_id)
    if existing is not None and existing.status == "approved":
        raise Conflict("identity already uploaded")

    try:
        if existing is None:
            identity = await crud_identity.create_identity(
                db, user_id=principal.user_id, document_url=document_url
            )
        else:
            identity = await crud_identity.reset_identity(db, existing, document_url=document_url)
    except SQLAlchemyError:
        logger.exception("identity submit failed for user %s", principal.user_id)
        await db.rollback()
        raise Internal()

    logger.info("identity %s submitted by user %s", identity.id, principal.user_id)
    return identity


async def resubmit(db: AsyncSession, principal: Optional[Principal], document_url: str) -> Identity:
    """
    Correction of an existing upload. Unlike submit, there must already be a record.
    """
    principal = _require_principal(principal)
    document_url = _require_document_url(document_url)

    existing = await _latest(db, principal.user_id)
    if existing is None:
        raise NotFound.of("identity")
    if existing.status == "approved":
        raise Conflict("identity already approved")

    try:
        identity = await crud_identity.reset_identity(db, existing, document_url=document_url)
    except SQLAlchemyError:
        logger.exception("identity resubmit failed for user %s", principal.user_id)
        await db.rollback()
        raise Internal()

    logger.info("identity %s resubmitted by user %s", identity.id, principal.user_id)
    return identity


async def get_status(db: AsyncSession, principal: Optional[Principal]) -> Identity:
    principal = _require_principal(principal)
    identity = await _latest(db, principal.user_id)
    if identity is None:
        raise NotFound.of("identity")
    return identity


async def get_for_renter(db: AsyncSession, renter_id: int) -> Identity:
    identity = await _latest(db, renter_id)
    if identity is None:
        raise NotFound.of("identity")
    return identity


async def list_pending(db: AsyncSession) -> List[IdentityReviewItem]:
    try:
        rows = await crud_identity.list_pending_identities(db)
    except SQLAlchemyError:
        logger.exception("pending identity listing failed")
        raise Internal()

    return [
        IdentityReviewItem(
            **IdentityOut.model_validate(r).model_dump(),
            user_name=r.user.name,
            user_email=r.user.email,
        )
        for r in rows
    ]


async def decide(
    db: AsyncSession,
    identity_id: int,
    decision: str,
    reason: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> Identity:
    """
    approved: verified, verified_at = now, reason cleared.
    rejected: not verified, verified_at cleared, reason stored (required).

    The renter's bookings pick up the new status in the same commit.
    """
    if decision not in DECISIONS:
        raise InvalidArgument("invalid status")
    reason = (reason or "").strip() or None
    if decision == "rejected" and reason is None:
        raise InvalidArgument("reason is required when rejecting identity")

    try:
        identity = await crud_identity.get_identity(db, identity_id)
    except SQLAlchemyError:
        logger.exception("identity lookup failed for id %s", identity_id)
        raise Internal()
    if identity is None:
        raise NotFound.of("identity")

    try:
        identity = await crud_identity.set_identity_decision(
            db,
            identity,
            decision=decision,
            reason=reason,
            decided_at=now or utcnow(),
        )
    except SQLAlchemyError:
        logger.exception("identity decision failed for id %s", identity_id)
        await db.rollback()
        raise Internal()

    logger.info("identity %s %s", identity.id, identity.status)
    return identity
