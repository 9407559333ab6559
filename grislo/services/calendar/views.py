# grislo/services/calendar/views.py
"""
Calendar and slot views over a Snapshot.

Day status:
  inactive   date belongs to an adjacent month (grid padding)
  disabled   outside booking window, or not an operating day
  full       operating + in window, no departure with a free seat
             (an operating day with an empty slot list is full)
  available  operating + in window, at least one departure with a free seat

today / selected are decorations independent of status.
No storage access here: callers pass an already-loaded snapshot.
"""

import calendar as _calendar
from datetime import date, datetime

from ...schemas.calendar import (
    BookedEntry,
    DayDetail,
    DayStatus,
    DaySummary,
    DayView,
    MonthView,
    SlotView,
)
from ..availability import (
    Snapshot,
    anonymized_reservations_for_date,
    as_date,
    is_operating_day,
    is_within_booking_window,
    remaining_slots,
    time_slots_for_date,
)

# Weeks start on Sunday
FIRST_WEEKDAY = _calendar.SUNDAY

FEW_SEATS_THRESHOLD = 2


def classify_day(snapshot: Snapshot, target: date | datetime | str) -> DayStatus:
    """Bookability status of a single date (never INACTIVE)."""
    target = as_date(target)

    if not is_within_booking_window(target, snapshot.today, snapshot.config.reservation_window_days):
        return DayStatus.DISABLED
    if not is_operating_day(snapshot, target):
        return DayStatus.DISABLED

    for time in time_slots_for_date(snapshot, target):
        if remaining_slots(snapshot, target, time) > 0:
            return DayStatus.AVAILABLE
    return DayStatus.FULL


def build_month_view(
    snapshot: Snapshot,
    year: int,
    month: int,
    selected: date | None = None,
) -> MonthView:
    """Month grid as full weeks, padding cells marked inactive."""
    cal = _calendar.Calendar(firstweekday=FIRST_WEEKDAY)
    weeks: list[list[DayView]] = []

    for week in cal.monthdatescalendar(year, month):
        row = []
        for dt in week:
            if dt.month != month:
                row.append(DayView(date=dt, status=DayStatus.INACTIVE))
                continue
            row.append(DayView(
                date=dt,
                status=classify_day(snapshot, dt),
                is_today=dt == snapshot.today,
                is_selected=selected is not None and dt == as_date(selected),
            ))
        weeks.append(row)

    return MonthView(year=year, month=month, weeks=weeks)


def build_slot_view(
    snapshot: Snapshot,
    target: date | datetime | str,
    selected_time: str | None = None,
) -> list[SlotView]:
    """Per-departure remaining seats with anonymized bookers (none on non-operating days)."""
    target = as_date(target)
    labelled = anonymized_reservations_for_date(snapshot, target)

    slots = []
    for time in _offered_times(snapshot, target):
        remaining = remaining_slots(snapshot, target, time)
        slots.append(SlotView(
            time=time,
            remaining=remaining,
            booked=remaining <= 0,
            few=0 < remaining <= FEW_SEATS_THRESHOLD,
            bookers=[label for r, label in labelled if r.time == time],
            is_selected=selected_time == time,
        ))
    return slots


def build_day_summary(snapshot: Snapshot, target: date | datetime | str) -> DaySummary:
    """Whole-day totals: capacity × departures vs. booked seats (zero capacity on non-operating days)."""
    target = as_date(target)
    times = _offered_times(snapshot, target)
    labelled = anonymized_reservations_for_date(snapshot, target)

    total_capacity = len(times) * snapshot.config.vehicle_capacity
    booked_count = len(labelled)
    available_count = max(total_capacity - booked_count, 0)

    if booked_count == 0:
        status = "empty"
    elif available_count == 0:
        status = "full"
    else:
        status = "partial"

    return DaySummary(
        date=target,
        status=status,
        total_capacity=total_capacity,
        booked_count=booked_count,
        available_count=available_count,
        booked=[BookedEntry(time=r.time, display_name=label) for r, label in labelled],
    )


def build_day_detail(
    snapshot: Snapshot,
    target: date | datetime | str,
    selected_time: str | None = None,
) -> DayDetail:
    target = as_date(target)
    return DayDetail(
        date=target,
        status=classify_day(snapshot, target),
        slots=build_slot_view(snapshot, target, selected_time),
        summary=build_day_summary(snapshot, target),
    )


def _offered_times(snapshot: Snapshot, target: date) -> list[str]:
    if not is_operating_day(snapshot, target):
        return []
    return time_slots_for_date(snapshot, target)
