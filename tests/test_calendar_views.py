from datetime import date, datetime, timedelta

from grislo.schemas.calendar import DayStatus
from grislo.schemas.reservations import Reservation, ReservationStatus
from grislo.schemas.schedule import OperatingDay
from grislo.schemas.service_config import ServiceConfig
from grislo.services.availability import Snapshot
from grislo.services.calendar import (
    build_day_detail,
    build_day_summary,
    build_month_view,
    build_slot_view,
    classify_day,
)

TODAY = date(2025, 5, 20)
DAY = date(2025, 6, 1)


def reservation(n, time="09:00", day=DAY):
    return Reservation(
        id=f"RES-20250520-{n:03d}",
        name=f"guest {n}",
        date=day,
        time=time,
        pickup_location="loc_station",
        created_at=datetime(2025, 5, 20, 9, 0) + timedelta(minutes=n),
    )


def snapshot(reservations=(), days=None, capacity=6):
    if days is None:
        days = [OperatingDay(date=DAY, time_slots=["09:00", "10:00"])]
    return Snapshot.build(
        config=ServiceConfig(vehicle_capacity=capacity, reservation_window_days=40),
        today=TODAY,
        operating_days=days,
        reservations=reservations,
    )


# ── Day classification ───────────────────────────────────────────────────


def test_day_with_one_open_departure_is_available():
    snap = snapshot([reservation(n) for n in range(6)])

    assert classify_day(snap, DAY) is DayStatus.AVAILABLE


def test_day_with_every_departure_full_is_full():
    snap = snapshot([reservation(n, "09:00") for n in range(2)] + [reservation(n, "10:00") for n in range(2, 4)], capacity=2)

    assert classify_day(snap, DAY) is DayStatus.FULL


def test_day_with_empty_slot_list_is_never_available():
    snap = snapshot(days=[OperatingDay(date=DAY, time_slots=[])])

    assert classify_day(snap, DAY) is DayStatus.FULL


def test_non_operating_and_out_of_window_days_are_disabled():
    far = TODAY + timedelta(days=41)
    snap = snapshot(days=[
        OperatingDay(date=DAY, time_slots=["09:00"], available=False),
        OperatingDay(date=far, time_slots=["09:00"]),
    ])

    assert classify_day(snap, DAY) is DayStatus.DISABLED
    assert classify_day(snap, far) is DayStatus.DISABLED
    assert classify_day(snap, date(2025, 6, 2)) is DayStatus.DISABLED


# ── Month grid ───────────────────────────────────────────────────────────


def test_month_view_weeks_start_on_sunday():
    view = build_month_view(snapshot(), 2025, 6, selected=DAY)

    # 2025-06-01 is a Sunday
    first = view.weeks[0][0]
    assert first.date == DAY
    assert first.status is DayStatus.AVAILABLE
    assert first.is_selected
    assert all(len(week) == 7 for week in view.weeks)


def test_month_view_marks_padding_inactive_and_today():
    view = build_month_view(snapshot(), 2025, 5)
    cells = [cell for week in view.weeks for cell in week]

    padding = [c for c in cells if c.date.month != 5]
    assert padding and all(c.status is DayStatus.INACTIVE for c in padding)

    today = next(c for c in cells if c.date == TODAY)
    assert today.is_today
    assert today.status is DayStatus.DISABLED


# ── Slots and summary ────────────────────────────────────────────────────


def test_slot_view_reports_remaining_and_bookers():
    snap = snapshot([reservation(n) for n in range(5)] + [reservation(9, "10:00")])

    slots = build_slot_view(snap, DAY, selected_time="10:00")

    nine, ten = slots
    assert (nine.time, nine.remaining, nine.booked, nine.few) == ("09:00", 1, False, True)
    assert nine.bookers == ["Aさん", "Bさん", "Cさん", "Dさん", "Eさん"]
    assert (ten.remaining, ten.few, ten.is_selected) == (5, False, True)
    assert ten.bookers == ["Fさん"]


def test_slot_view_marks_full_departure_booked():
    snap = snapshot([reservation(n) for n in range(6)])

    nine = build_slot_view(snap, DAY)[0]

    assert nine.remaining == 0
    assert nine.booked
    assert not nine.few


def test_day_summary_totals():
    snap = snapshot([reservation(1), reservation(2, "10:00")])

    summary = build_day_summary(snap, DAY)

    assert summary.total_capacity == 12
    assert summary.booked_count == 2
    assert summary.available_count == 10
    assert summary.status == "partial"
    assert [(b.time, b.display_name) for b in summary.booked] == [("09:00", "Aさん"), ("10:00", "Bさん")]


def test_day_summary_empty_and_full():
    assert build_day_summary(snapshot(), DAY).status == "empty"

    full = snapshot([reservation(n, "09:00") for n in range(1)] + [reservation(5, "10:00")], capacity=1)
    assert build_day_summary(full, DAY).status == "full"


def test_day_detail_ignores_cancelled():
    cancelled = reservation(1).model_copy(update={"status": ReservationStatus.CANCELLED})
    detail = build_day_detail(snapshot([cancelled]), DAY)

    assert detail.status is DayStatus.AVAILABLE
    assert detail.slots[0].remaining == 6
    assert detail.summary.booked_count == 0


def test_non_operating_day_offers_no_seats():
    snap = snapshot(days=[
        OperatingDay(date=DAY, time_slots=["09:00"]),
        OperatingDay(date=date(2025, 6, 3), time_slots=["09:00"], available=False),
    ])

    for target in (date(2025, 6, 2), date(2025, 6, 3)):
        detail = build_day_detail(snap, target)
        assert detail.status is DayStatus.DISABLED
        assert detail.slots == []
        assert detail.summary.total_capacity == 0
        assert detail.summary.available_count == 0
        assert detail.summary.status == "empty"
