# rentalhub/api/routers/host.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rentalhub.api.dependencies import require_role
from rentalhub.db.session import get_db
from rentalhub.schemas.auth import Principal
from rentalhub.services import reservations

router = APIRouter()


@router.get("/bookings")
async def host_bookings(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("host")),
):
    """
    List all bookings for items owned by the current host.
    """
    items = await reservations.list_host_reservations(db, principal)
    return {"success": True, "message": "success", "data": {"items": items}}


@router.get("/bookings/{booking_id}")
async def host_booking_detail(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("host")),
):
    """
    Full booking aggregate, including the renter's contact snapshot and
    identity status. Bookings of other hosts are reported as missing.
    """
    detail = await reservations.get_host_reservation(db, principal, booking_id)
    return {"success": True, "message": "success", "data": detail}


@router.get("/customers")
async def host_customers(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("host")),
):
    """
    Renters who have booked with the current host, one row each, with the
    identity status of the record their booking referenced.
    """
    items = await reservations.list_host_customers(db, principal)
    return {"success": True, "message": "success", "data": {"items": items}}
