# grislo/services/availability/__init__.py
"""
Availability calculator.

Pure functions over a Snapshot (config + schedule + reservations + today).
"""

from .snapshot import Snapshot, load_snapshot, parse_records
from .calculator import (
    anonymize_name,
    anonymized_reservations_for_date,
    as_date,
    can_book,
    can_cancel,
    is_operating_day,
    is_slot_booked,
    is_within_booking_window,
    remaining_slots,
    reservation_count,
    reservations_for_date,
    time_slots_for_date,
)

__all__ = [
    "Snapshot",
    "load_snapshot",
    "parse_records",
    "anonymize_name",
    "anonymized_reservations_for_date",
    "as_date",
    "can_book",
    "can_cancel",
    "is_operating_day",
    "is_slot_booked",
    "is_within_booking_window",
    "remaining_slots",
    "reservation_count",
    "reservations_for_date",
    "time_slots_for_date",
]
