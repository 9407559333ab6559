# grislo/schemas/calendar.py
"""
Pydantic schemas for calendar / slot views.
"""

from datetime import date
from enum import Enum
from pydantic import BaseModel


class DayStatus(str, Enum):
    INACTIVE = "inactive"    # Outside the displayed month
    DISABLED = "disabled"    # Outside booking window or not operating
    FULL = "full"            # Operating, in window, no slot with room
    AVAILABLE = "available"  # At least one slot with room


class DayView(BaseModel):
    """Status of a single cell in the month grid."""
    date: date
    status: DayStatus
    is_today: bool = False
    is_selected: bool = False


class MonthView(BaseModel):
    year: int
    month: int
    weeks: list[list[DayView]]


class SlotView(BaseModel):
    """A single departure on the selected date."""
    time: str
    remaining: int
    booked: bool
    few: bool = False
    bookers: list[str] = []
    is_selected: bool = False


class BookedEntry(BaseModel):
    time: str
    display_name: str


class DaySummary(BaseModel):
    date: date
    status: str  # empty / partial / full
    total_capacity: int
    booked_count: int
    available_count: int
    booked: list[BookedEntry] = []


class DayDetail(BaseModel):
    date: date
    status: DayStatus
    slots: list[SlotView]
    summary: DaySummary
