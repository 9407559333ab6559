# grislo/schemas/service_config.py
"""
Service configuration (singleton per process, replaced wholesale on reload).
"""

import re

from pydantic import AliasGenerator, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

DEFAULT_TIME_SLOTS = ["09:00", "10:00", "11:00", "13:00", "14:00", "15:00", "16:00"]


class ServiceConfig(BaseModel):
    """
    Configuration for the booking engine.

    Attributes:
        vehicle_capacity: Seats per departure (per date + time slot)
        reservation_window_days: Booking window length, inclusive of today
        cancel_deadline_hours: Self-service cancellation cutoff before the service day
        time_slots: Default ordered departures when an operating day has none
    """
    service_name: str = "町のグリスロ予約"
    vehicle_capacity: int = Field(default=6, ge=1)
    max_passengers_per_reservation: int = Field(default=1, ge=1)
    reservation_window_days: int = Field(default=40, ge=0)
    cancel_deadline_hours: int = Field(default=24, ge=0)
    time_slots: list[str] = Field(default_factory=lambda: list(DEFAULT_TIME_SLOTS))
    admin_password: str = "admin123"

    model_config = {
        "frozen": True,
        "alias_generator": AliasGenerator(validation_alias=to_camel),
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("time_slots")
    @classmethod
    def validate_time_slots(cls, v: list[str]) -> list[str]:
        for slot in v:
            if not TIME_RE.match(slot):
                raise ValueError(f"Time slot must be in HH:MM format, got {slot!r}")
        return v
