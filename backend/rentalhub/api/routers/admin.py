# rentalhub/api/routers/admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rentalhub.api.dependencies import require_role
from rentalhub.db.session import get_db
from rentalhub.schemas.auth import Principal
from rentalhub.schemas.identity import IdentityDecision, IdentityOut
from rentalhub.services import identity as identity_service

router = APIRouter()


@router.get("/identity/pending")
async def admin_pending_identities(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("admin")),
):
    """
    Review queue: pending uploads, oldest first, with renter name and email.
    """
    items = await identity_service.list_pending(db)
    return {"success": True, "message": "success", "data": {"items": items}}


@router.get("/identity/user/{user_id}")
async def admin_identity_for_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("admin")),
):
    identity = await identity_service.get_for_renter(db, user_id)
    return {
        "success": True,
        "message": "success",
        "data": IdentityOut.model_validate(identity),
    }


@router.post("/identity/{identity_id}/validate")
async def admin_validate_identity(
    identity_id: int,
    body: IdentityDecision,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("admin")),
):
    """
    Approve or reject an upload. Rejection needs a reason the renter can act on.
    """
    identity = await identity_service.decide(db, identity_id, body.status, body.reason)
    return {
        "success": True,
        "message": f"identity {identity.status}",
        "data": IdentityOut.model_validate(identity),
    }
