# rentalhub/api/routers/bookings.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rentalhub.api.dependencies import require_role
from rentalhub.db.session import get_db
from rentalhub.schemas.auth import Principal
from rentalhub.schemas.booking import BookingCreate
from rentalhub.services import reservations

router = APIRouter()


@router.post("")
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("customer")),
):
    """
    Price the cart server-side and hold it for the lock window.
    The response carries time_remaining_minutes for the payment countdown.
    """
    detail = await reservations.create_reservation(db, principal, body)
    return {"success": True, "message": "booking created", "data": detail}


@router.get("")
async def list_bookings(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("customer")),
):
    items = await reservations.list_reservations(db, principal)
    return {"success": True, "message": "success", "data": {"items": items}}


@router.get("/{booking_id}")
async def get_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_role("customer")),
):
    detail = await reservations.get_reservation(db, principal, booking_id)
    return {"success": True, "message": "success", "data": detail}
