# grislo/services/reservations/lifecycle.py
"""
Reservation lifecycle: create, cancel, look up.

States: confirmed (initial) → cancelled (terminal, one-way).

Capacity is enforced check-then-write: the remaining-seat check and the
insert are two separate steps with no lock between them. Two sessions racing
for the last seat can both succeed; the overrun is fixed by manual
cancellation.
"""

import logging
import random
from datetime import date, datetime
from enum import Enum
from typing import Callable

from ...schemas.reservations import MyReservation, Reservation, ReservationStatus
from ...schemas.service_config import ServiceConfig
from ..availability import (
    Snapshot,
    anonymize_name,
    as_date,
    can_cancel,
    is_operating_day,
    is_within_booking_window,
    load_snapshot,
    remaining_slots,
    reservations_for_date,
    time_slots_for_date,
)
from ..storage import RESERVATIONS, StorageChain
from .errors import CapacityExceeded, ValidationFailure
from .ids import generate_reservation_id
from .my_reservations import MyReservationsStore

logger = logging.getLogger(__name__)


class CancelResult(str, Enum):
    CANCELLED = "cancelled"
    NOT_FOUND = "not_found"
    ALREADY_CANCELLED = "already_cancelled"
    PAST_DEADLINE = "past_deadline"

    @property
    def ok(self) -> bool:
        return self is CancelResult.CANCELLED


class ReservationManager:
    """Creates and cancels reservations through the storage chain."""

    def __init__(
        self,
        chain: StorageChain,
        config: ServiceConfig,
        owned: MyReservationsStore | None = None,
        clock: Callable[[], datetime] = datetime.now,
        rng: random.Random | None = None,
    ):
        self.chain = chain
        self.config = config
        self.owned = owned
        self.clock = clock
        self.rng = rng

    def today(self) -> date:
        return self.clock().date()

    def snapshot(self) -> Snapshot:
        """Fresh snapshot of live data (never reused across operations)."""
        return load_snapshot(self.chain, self.config, self.today())

    # ── Create ───────────────────────────────────────────────────────────

    def create(
        self,
        target_date: date | datetime | str,
        time: str,
        location: str | None,
        name: str | None = None,
        notes: str | None = None,
    ) -> Reservation:
        """
        Create a confirmed reservation.

        Raises:
            ValidationFailure: no/unknown location, date outside window,
                non-operating day, or time not offered that day
            CapacityExceeded: no seats left on the departure
        """
        if not location or not location.strip():
            raise ValidationFailure("Pickup location is required")
        location = location.strip()
        target_date = as_date(target_date)

        snapshot = self.snapshot()

        if snapshot.pickup_locations:
            known = snapshot.find_location(location)
            if known is None:
                raise ValidationFailure(f"Unknown pickup location: {location}")
            location = known.id

        if not is_within_booking_window(target_date, snapshot.today, self.config.reservation_window_days):
            raise ValidationFailure(
                f"{target_date.isoformat()} is outside the booking window "
                f"({self.config.reservation_window_days} days)"
            )
        if not is_operating_day(snapshot, target_date):
            raise ValidationFailure(f"{target_date.isoformat()} is not an operating day")
        if time not in time_slots_for_date(snapshot, target_date):
            raise ValidationFailure(f"{time} is not offered on {target_date.isoformat()}")
        if remaining_slots(snapshot, target_date, time) <= 0:
            raise CapacityExceeded(f"{target_date.isoformat()} {time} is fully booked")

        label = anonymize_name(len(reservations_for_date(snapshot, target_date)))
        now = self.clock()
        reservation = Reservation(
            id=generate_reservation_id(
                now.date(),
                taken={r.id for r in snapshot.reservations},
                rng=self.rng,
            ),
            name=(name or "").strip() or label,
            display_name=label,
            date=target_date,
            time=time,
            pickup_location=location,
            notes=(notes or "").strip(),
            status=ReservationStatus.CONFIRMED,
            created_at=now,
        )

        outcome = self.chain.insert(RESERVATIONS, reservation.model_dump(mode="json"))
        if not outcome.ok:
            logger.error(f"Reservation {reservation.id} was not persisted on any tier")
        elif outcome.unavailable:
            logger.warning(
                f"Reservation {reservation.id} persisted partially; "
                f"unavailable tiers: {', '.join(outcome.unavailable)}"
            )

        if self.owned is not None:
            self.owned.add(reservation.id)

        logger.info(
            f"Reservation created: {reservation.id} "
            f"{reservation.date.isoformat()} {reservation.time} @ {reservation.pickup_location}"
        )
        return reservation

    # ── Cancel ───────────────────────────────────────────────────────────

    def cancel(self, reservation_id: str, *, admin: bool = False) -> CancelResult:
        """
        Cancel a reservation. Never raises.

        Self-service cancellation must happen before the deadline
        (the day before the service day); admin cancellation is unrestricted.
        """
        reservation = self.find_by_id(reservation_id)
        if reservation is None:
            return CancelResult.NOT_FOUND
        if reservation.status == ReservationStatus.CANCELLED:
            return CancelResult.ALREADY_CANCELLED
        if not admin and not can_cancel(reservation.date, self.today(), self.config.cancel_deadline_hours):
            return CancelResult.PAST_DEADLINE

        outcome = self.chain.update(
            RESERVATIONS,
            reservation_id,
            {"status": ReservationStatus.CANCELLED.value},
        )
        if not outcome.ok:
            logger.warning(f"Cancel of {reservation_id} matched no writable tier")
            return CancelResult.NOT_FOUND

        logger.info(f"Reservation cancelled: {reservation_id} (admin={admin})")
        return CancelResult.CANCELLED

    # ── Lookup ───────────────────────────────────────────────────────────

    def find_by_id(self, reservation_id: str) -> Reservation | None:
        """Exact-match lookup over the live reservation set."""
        for reservation in self.snapshot().reservations:
            if reservation.id == reservation_id:
                return reservation
        return None

    def my_reservations(self) -> list[MyReservation]:
        """This session's active reservations, earliest departure first."""
        if self.owned is None:
            return []
        ids = set(self.owned.ids())
        if not ids:
            return []

        snapshot = self.snapshot()
        mine = [r for r in snapshot.reservations if r.id in ids and r.is_active]
        mine.sort(key=lambda r: (r.date, r.time))
        return [
            MyReservation(
                reservation=r,
                location_name=snapshot.location_name(r.pickup_location),
                cancellable=can_cancel(r.date, snapshot.today, self.config.cancel_deadline_hours),
            )
            for r in mine
        ]
