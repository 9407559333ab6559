# grislo/services/admin.py
"""
Administrative operations: operating days, pickup locations, dashboard.

Writes go through the same storage chain as customer bookings.
Admin cancellation bypasses the self-service deadline.
"""

import logging
import random
from datetime import date, datetime
from typing import Callable

from ..schemas.pickup_locations import PickupLocation
from ..schemas.reservations import Reservation, ReservationStatus
from ..schemas.schedule import OperatingDay
from ..schemas.service_config import TIME_RE, ServiceConfig
from .availability import Snapshot, as_date, load_snapshot, parse_records
from .reservations import CancelResult, ReservationManager, ValidationFailure, generate_location_id
from .storage import PICKUP_LOCATIONS, SCHEDULE, StorageChain, WriteOutcome

logger = logging.getLogger(__name__)


class AdminService:
    """Schedule / location maintenance and reservation overview."""

    def __init__(
        self,
        chain: StorageChain,
        config: ServiceConfig,
        clock: Callable[[], datetime] = datetime.now,
        rng: random.Random | None = None,
    ):
        self.chain = chain
        self.config = config
        self.clock = clock
        self.rng = rng
        self.reservations = ReservationManager(chain, config, clock=clock, rng=rng)

    def snapshot(self) -> Snapshot:
        return load_snapshot(self.chain, self.config, self.clock().date())

    # ── Schedule ─────────────────────────────────────────────────────────

    def merge_time_slots(self, custom: list[str] | None = None) -> list[str]:
        """Sorted union of the default departures and admin-added ones."""
        custom = custom or []
        for time in custom:
            if not TIME_RE.match(time):
                raise ValidationFailure(f"Time must be in HH:MM format, got {time!r}")
        return sorted(set(self.config.time_slots) | set(custom))

    def upsert_operating_day(self, target_date: date | str, time_slots: list[str]) -> OperatingDay:
        """Add or replace an operating day (always available)."""
        for time in time_slots:
            if not TIME_RE.match(time):
                raise ValidationFailure(f"Time must be in HH:MM format, got {time!r}")

        day = OperatingDay(
            date=as_date(target_date),
            time_slots=sorted(set(time_slots)),
            available=True,
        )
        self.chain.materialize(SCHEDULE)
        outcome = self.chain.save(SCHEDULE, day.model_dump(mode="json"))
        _log_outcome("schedule upsert", day.date.isoformat(), outcome)
        return day

    def remove_operating_day(self, target_date: date | str) -> bool:
        key = as_date(target_date).isoformat()
        self.chain.materialize(SCHEDULE)
        outcome = self.chain.delete(SCHEDULE, key)
        _log_outcome("schedule delete", key, outcome)
        return outcome.ok

    def upcoming_operating_days(self) -> list[OperatingDay]:
        snapshot = self.snapshot()
        return sorted(
            (d for d in snapshot.operating_days.values() if d.date >= snapshot.today),
            key=lambda d: d.date,
        )

    # ── Pickup locations ─────────────────────────────────────────────────

    def add_pickup_location(self, name: str, address: str = "") -> PickupLocation:
        name = (name or "").strip()
        if not name:
            raise ValidationFailure("Location name is required")

        existing = parse_records(PickupLocation, self.chain.materialize(PICKUP_LOCATIONS))
        location = PickupLocation(
            id=generate_location_id(self.rng),
            name=name,
            address=(address or "").strip(),
            sort_order=max((loc.sort_order for loc in existing), default=0) + 1,
        )
        outcome = self.chain.save(PICKUP_LOCATIONS, location.model_dump(mode="json"))
        _log_outcome("location insert", location.id, outcome)
        return location

    def remove_pickup_location(self, location_id: str) -> bool:
        self.chain.materialize(PICKUP_LOCATIONS)
        outcome = self.chain.delete(PICKUP_LOCATIONS, location_id)
        _log_outcome("location delete", location_id, outcome)
        return outcome.ok

    def location_name(self, location_id: str) -> str:
        return self.snapshot().location_name(location_id)

    # ── Reservations ─────────────────────────────────────────────────────

    def cancel_reservation(self, reservation_id: str) -> CancelResult:
        return self.reservations.cancel(reservation_id, admin=True)

    def stats(self) -> dict:
        snapshot = self.snapshot()
        today = snapshot.today
        active = [r for r in snapshot.reservations if r.is_active]
        return {
            "today_reservations": sum(1 for r in active if r.date == today),
            "total_reservations": len(active),
            "upcoming_days": sum(
                1 for d in snapshot.operating_days.values()
                if d.date >= today and d.available
            ),
            "cancelled": sum(1 for r in snapshot.reservations if not r.is_active),
        }

    def upcoming_reservations(self, limit: int = 10) -> list[Reservation]:
        snapshot = self.snapshot()
        upcoming = [
            r for r in snapshot.reservations
            if r.date >= snapshot.today and r.is_active
        ]
        upcoming.sort(key=lambda r: (r.date, r.time))
        return upcoming[:limit]

    def filter_reservations(
        self,
        target_date: date | str | None = None,
        status: ReservationStatus | str | None = None,
    ) -> list[Reservation]:
        """All reservations matching the filters, newest first."""
        reservations = list(self.snapshot().reservations)
        if target_date:
            wanted = as_date(target_date)
            reservations = [r for r in reservations if r.date == wanted]
        if status:
            wanted_status = ReservationStatus(status)
            reservations = [r for r in reservations if r.status == wanted_status]
        reservations.reverse()
        return reservations


def _log_outcome(op: str, key: str, outcome: WriteOutcome) -> None:
    if not outcome.ok:
        logger.error(f"{op} {key}: no tier applied the write")
    elif outcome.unavailable:
        logger.warning(f"{op} {key}: skipped on {', '.join(outcome.unavailable)}")
    else:
        logger.info(f"{op} {key}: ok")
