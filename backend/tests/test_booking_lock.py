from datetime import datetime, timedelta

from rentalhub.services.booking_lock import lock, remaining

T = datetime(2030, 1, 1, 9, 0, 0)


def test_lock_expires_thirty_minutes_after_creation():
    assert lock(T) == T + timedelta(minutes=30)


def test_lock_length_is_configurable():
    assert lock(T, minutes=45) == T + timedelta(minutes=45)


def test_remaining_counts_down():
    expiry = lock(T)
    assert remaining(expiry, T) == 30
    assert remaining(expiry, T + timedelta(minutes=10)) == 20


def test_remaining_rounds_down_to_whole_minutes():
    expiry = lock(T)
    assert remaining(expiry, T + timedelta(minutes=10, seconds=1)) == 19


def test_remaining_is_zero_after_expiry():
    expiry = lock(T)
    assert remaining(expiry, T + timedelta(minutes=30)) == 0
    assert remaining(expiry, T + timedelta(minutes=31)) == 0
    assert remaining(expiry, T + timedelta(days=2)) == 0


def test_remaining_never_increases_as_time_passes():
    expiry = lock(T)
    readings = [remaining(expiry, T + timedelta(seconds=s)) for s in range(0, 40 * 60, 37)]

    assert all(r >= 0 for r in readings)
    assert all(a >= b for a, b in zip(readings, readings[1:]))
