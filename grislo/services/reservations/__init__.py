# grislo/services/reservations/__init__.py
"""
Reservation lifecycle.

confirmed → cancelled (one-way), deadline policy, anonymized labels,
per-session My-Reservations list.
"""

from .errors import ReservationError, ValidationFailure, CapacityExceeded
from .ids import generate_reservation_id, generate_location_id
from .my_reservations import MyReservationsStore
from .lifecycle import CancelResult, ReservationManager

__all__ = [
    "ReservationError",
    "ValidationFailure",
    "CapacityExceeded",
    "generate_reservation_id",
    "generate_location_id",
    "MyReservationsStore",
    "CancelResult",
    "ReservationManager",
]
