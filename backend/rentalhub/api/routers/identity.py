# rentalhub/api/routers/identity.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rentalhub.api.dependencies import require_role
from rentalhub.db.session import get_db
from rentalhub.schemas.auth import Principal
from rentalhub.schemas.identity import IdentityOut, IdentitySubmit
from rentalhub.services import identity as identity_service

router = APIRouter()


@router.post("")
async def submit_identity(
    body: IdentitySubmit,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("customer")),
):
    """
    First upload of the renter's identity document (URL from object storage).
    """
    identity = await identity_service.submit(db, principal, body.document_url)
    return {
        "success": True,
        "message": "identity uploaded",
        "data": IdentityOut.model_validate(identity),
    }


@router.put("")
async def resubmit_identity(
    body: IdentitySubmit,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("customer")),
):
    """
    Replace a pending or rejected document; status goes back to pending.
    """
    identity = await identity_service.resubmit(db, principal, body.document_url)
    return {
        "success": True,
        "message": "identity updated",
        "data": IdentityOut.model_validate(identity),
    }


@router.get("")
async def identity_status(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("customer")),
):
    identity = await identity_service.get_status(db, principal)
    return {
        "success": True,
        "message": "success",
        "data": IdentityOut.model_validate(identity),
    }
