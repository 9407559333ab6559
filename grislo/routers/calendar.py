# grislo/routers/calendar.py
"""
Calendar API endpoints.

GET /calendar/month    - Month grid with per-day status
GET /calendar/day      - Departures of a day with remaining seats
GET /calendar/can-book - Bookability of a single departure
"""

from datetime import date
from fastapi import APIRouter, Depends, Query

from ..deps import get_snapshot
from ..schemas.calendar import DayDetail, MonthView
from ..services.availability import Snapshot, can_book, remaining_slots
from ..services.calendar import build_day_detail, build_month_view

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/month", response_model=MonthView)
def get_month(
    year: int | None = None,
    month: int | None = Query(None, ge=1, le=12),
    selected: date | None = None,
    snapshot: Snapshot = Depends(get_snapshot),
):
    """Month view; defaults to the current month."""
    year = year or snapshot.today.year
    month = month or snapshot.today.month
    return build_month_view(snapshot, year, month, selected)


@router.get("/day", response_model=DayDetail)
def get_day(
    target_date: date = Query(..., alias="date"),
    time: str | None = None,
    snapshot: Snapshot = Depends(get_snapshot),
):
    return build_day_detail(snapshot, target_date, time)


@router.get("/can-book")
def get_can_book(
    target_date: date = Query(..., alias="date"),
    time: str = Query(...),
    snapshot: Snapshot = Depends(get_snapshot),
):
    return {
        "date": target_date.isoformat(),
        "time": time,
        "can_book": can_book(snapshot, target_date, time),
        "remaining": remaining_slots(snapshot, target_date, time),
    }
