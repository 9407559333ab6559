# grislo/services/availability/calculator.py
"""
Availability calculation over a Snapshot.

All functions are pure: no storage access, no clock access (today comes from
the snapshot or the caller).

Bookable (date, time) requires:
✓ date within [today, today + reservation_window_days]
✓ an operating day record for date with available = true
✓ time offered on that day (day's own list, else config default)
✓ remaining seats > 0

Capacity is per departure only; pickup location never constrains it.
"""

from datetime import date, datetime, timedelta
from math import ceil

from ...schemas.reservations import Reservation
from .snapshot import Snapshot

LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
HONORIFIC = "さん"


def as_date(value: date | datetime | str) -> date:
    """Normalise to a calendar day (time-of-day dropped)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


# ── Window / schedule ────────────────────────────────────────────────────


def is_within_booking_window(target: date | datetime | str, today: date, window_days: int) -> bool:
    """today <= target <= today + window_days, both ends inclusive."""
    target = as_date(target)
    today = as_date(today)
    return today <= target <= today + timedelta(days=window_days)


def is_operating_day(snapshot: Snapshot, target: date | datetime | str) -> bool:
    day = snapshot.operating_days.get(as_date(target))
    return day is not None and day.available


def time_slots_for_date(snapshot: Snapshot, target: date | datetime | str) -> list[str]:
    """Day's own slot list when set (even if empty), else the config default."""
    day = snapshot.operating_days.get(as_date(target))
    if day is not None and day.time_slots is not None:
        return list(day.time_slots)
    return list(snapshot.config.time_slots)


# ── Counts ───────────────────────────────────────────────────────────────


def reservations_for_date(snapshot: Snapshot, target: date | datetime | str) -> list[Reservation]:
    """Non-cancelled reservations for a day, oldest first."""
    target = as_date(target)
    return [r for r in snapshot.reservations if r.date == target and r.is_active]


def reservation_count(snapshot: Snapshot, target: date | datetime | str, time: str) -> int:
    return sum(1 for r in reservations_for_date(snapshot, target) if r.time == time)


def remaining_slots(snapshot: Snapshot, target: date | datetime | str, time: str) -> int:
    """
    capacity − non-cancelled count.

    May go negative after a racing double-booking; treat <= 0 as full.
    """
    return snapshot.config.vehicle_capacity - reservation_count(snapshot, target, time)


def is_slot_booked(snapshot: Snapshot, target: date | datetime | str, time: str) -> bool:
    return remaining_slots(snapshot, target, time) <= 0


def can_book(snapshot: Snapshot, target: date | datetime | str, time: str) -> bool:
    target = as_date(target)
    return (
        is_within_booking_window(target, snapshot.today, snapshot.config.reservation_window_days)
        and is_operating_day(snapshot, target)
        and time in time_slots_for_date(snapshot, target)
        and remaining_slots(snapshot, target, time) > 0
    )


# ── Cancellation deadline ────────────────────────────────────────────────


def can_cancel(target: date | datetime | str, today: date, deadline_hours: int = 24) -> bool:
    """
    Self-service cancellation cutoff.

    Deadline is counted in whole days before the service day:
    24h → allowed up to and including the day before.
    """
    deadline_days = ceil(deadline_hours / 24)
    return as_date(today) <= as_date(target) - timedelta(days=deadline_days)


# ── Anonymized labels ────────────────────────────────────────────────────


def anonymize_name(index: int) -> str:
    """0 → "Aさん", 25 → "Zさん", 26 → "Aさん"."""
    return LETTERS[index % len(LETTERS)] + HONORIFIC


def anonymized_reservations_for_date(
    snapshot: Snapshot,
    target: date | datetime | str,
) -> list[tuple[Reservation, str]]:
    """
    Pair each active reservation of the day with its positional label.

    Labels follow current position, so cancelling an earlier reservation
    shifts the letters of later ones on the next render.
    """
    return [
        (r, anonymize_name(i))
        for i, r in enumerate(reservations_for_date(snapshot, target))
    ]
