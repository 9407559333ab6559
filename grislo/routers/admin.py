# grislo/routers/admin.py
"""
Admin endpoints: dashboard and reservation management.

Access control is handled outside this service.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_admin_service
from ..schemas.reservations import CancelResponse, Reservation, ReservationStatus
from ..services.admin import AdminService
from ..services.reservations import CancelResult

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats")
def get_stats(admin: AdminService = Depends(get_admin_service)):
    return admin.stats()


@router.get("/reservations", response_model=list[Reservation])
def list_reservations(
    target_date: date | None = Query(None, alias="date"),
    status: ReservationStatus | None = None,
    admin: AdminService = Depends(get_admin_service),
):
    return admin.filter_reservations(target_date, status)


@router.get("/reservations/upcoming", response_model=list[Reservation])
def list_upcoming_reservations(
    limit: int = Query(10, ge=1, le=100),
    admin: AdminService = Depends(get_admin_service),
):
    return admin.upcoming_reservations(limit)


@router.post("/reservations/{id}/cancel", response_model=CancelResponse)
def cancel_reservation(
    id: str,
    admin: AdminService = Depends(get_admin_service),
):
    result = admin.cancel_reservation(id)
    if result is CancelResult.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Not found")
    return CancelResponse(id=id, result=result.value, cancelled=result.ok)
