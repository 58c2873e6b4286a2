# rentalhub/services/booking_lock.py
"""
The booking hold: a payment countdown stamped on each new booking.

It is a data field only. Nothing here reserves stock or blocks a
concurrent booking of the same item.
"""
from datetime import datetime, timedelta

DEFAULT_LOCK_MINUTES = 30


def lock(now: datetime, minutes: int = DEFAULT_LOCK_MINUTES) -> datetime:
    """Expiry timestamp for a booking created at `now`."""
    return now + timedelta(minutes=minutes)


def remaining(expiry: datetime, now: datetime) -> int:
    """Whole minutes left before `expiry`; 0 once it has passed."""
    seconds = (expiry - now).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // 60)
