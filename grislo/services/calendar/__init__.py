# grislo/services/calendar/__init__.py
"""Calendar / slot view builder."""

from .views import (
    build_day_detail,
    build_day_summary,
    build_month_view,
    build_slot_view,
    classify_day,
)

__all__ = [
    "build_day_detail",
    "build_day_summary",
    "build_month_view",
    "build_slot_view",
    "classify_day",
]
