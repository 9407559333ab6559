# grislo/services/reservations/errors.py
"""Reservation lifecycle errors. Raised before any storage write."""


class ReservationError(ValueError):
    """Base class for refused reservation requests."""


class ValidationFailure(ReservationError):
    """Missing/invalid selection: location, date outside window, non-operating day, unknown slot."""


class CapacityExceeded(ReservationError):
    """The departure has no seats left at write time."""
