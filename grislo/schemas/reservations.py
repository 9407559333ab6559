# grislo/schemas/reservations.py

from datetime import date, datetime
from enum import Enum
from typing import Optional
from pydantic import AliasGenerator, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from .service_config import TIME_RE


class ReservationStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class ReservationCreate(BaseModel):
    date: date
    time: str = Field(description="Departure in HH:MM format")
    pickup_location: str = ""
    name: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not TIME_RE.match(v):
            raise ValueError("Time must be in HH:MM format")
        return v


class Reservation(BaseModel):
    id: str
    name: str
    display_name: Optional[str] = None
    date: date
    time: str
    pickup_location: str
    notes: str = ""
    status: ReservationStatus = ReservationStatus.CONFIRMED
    created_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": AliasGenerator(validation_alias=to_camel),
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("notes", mode="before")
    @classmethod
    def none_notes(cls, v):
        return v or ""

    @property
    def is_active(self) -> bool:
        return self.status != ReservationStatus.CANCELLED


class MyReservation(BaseModel):
    """Reservation as shown to its owner."""
    reservation: Reservation
    location_name: str
    cancellable: bool


class CancelResponse(BaseModel):
    id: str
    result: str
    cancelled: bool
