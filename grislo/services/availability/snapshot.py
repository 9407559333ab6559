# grislo/services/availability/snapshot.py
"""
Point-in-time snapshot consumed by the calculator and view builder.

Taken once per render cycle so a single render is internally consistent.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Iterable

from pydantic import ValidationError

from ...schemas.pickup_locations import PickupLocation
from ...schemas.reservations import Reservation
from ...schemas.schedule import OperatingDay
from ...schemas.service_config import ServiceConfig
from ..storage import PICKUP_LOCATIONS, RESERVATIONS, SCHEDULE, StorageChain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """
    Attributes:
        config: Service configuration in effect
        today: Reference day for window/deadline checks
        operating_days: date → OperatingDay (first record per date wins)
        reservations: All reservations, oldest first
        pickup_locations: Locations in display order
    """
    config: ServiceConfig
    today: date
    operating_days: dict[date, OperatingDay] = field(default_factory=dict)
    reservations: tuple[Reservation, ...] = ()
    pickup_locations: tuple[PickupLocation, ...] = ()

    @classmethod
    def build(
        cls,
        config: ServiceConfig,
        today: date,
        operating_days: Iterable[OperatingDay] = (),
        reservations: Iterable[Reservation] = (),
        pickup_locations: Iterable[PickupLocation] = (),
    ) -> "Snapshot":
        days: dict[date, OperatingDay] = {}
        for day in operating_days:
            days.setdefault(day.date, day)
        return cls(
            config=config,
            today=today,
            operating_days=days,
            reservations=tuple(sorted(reservations, key=_created_key)),
            pickup_locations=tuple(pickup_locations),
        )

    def find_location(self, ref: str) -> PickupLocation | None:
        """Match a location by id, or by name for records that stored the name."""
        for location in self.pickup_locations:
            if location.id == ref or location.name == ref:
                return location
        return None

    def location_name(self, ref: str) -> str:
        location = self.find_location(ref)
        return location.name if location else ref


def load_snapshot(
    chain: StorageChain,
    config: ServiceConfig,
    today: date | None = None,
) -> Snapshot:
    """Load schedule, reservations and locations through the chain."""
    return Snapshot.build(
        config=config,
        today=today or date.today(),
        operating_days=parse_records(OperatingDay, chain.load(SCHEDULE)),
        reservations=parse_records(Reservation, chain.load(RESERVATIONS)),
        pickup_locations=parse_records(PickupLocation, chain.load(PICKUP_LOCATIONS)),
    )


def parse_records(model, rows: list[dict]) -> list:
    """Validate raw records, skipping (and logging) malformed ones."""
    parsed = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning(f"Skipping malformed {model.__name__} record: {exc.error_count()} errors")
    return parsed


def _created_key(reservation: Reservation) -> datetime:
    created = reservation.created_at
    if created.tzinfo is not None:
        return created.astimezone(timezone.utc).replace(tzinfo=None)
    return created
