# grislo/routers/schedule.py

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..deps import get_admin_service
from ..schemas.schedule import OperatingDay, OperatingDayUpsert
from ..services.admin import AdminService
from ..services.reservations import ValidationFailure

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("/", response_model=list[OperatingDay])
def list_operating_days(admin: AdminService = Depends(get_admin_service)):
    return admin.upcoming_operating_days()


@router.get("/time-slots", response_model=list[str])
def list_time_slots(
    custom: list[str] = Query(default=[]),
    admin: AdminService = Depends(get_admin_service),
):
    try:
        return admin.merge_time_slots(custom)
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{target_date}", response_model=OperatingDay)
def upsert_operating_day(
    target_date: date,
    data: OperatingDayUpsert,
    admin: AdminService = Depends(get_admin_service),
):
    return admin.upsert_operating_day(target_date, data.time_slots)


@router.delete("/{target_date}", status_code=status.HTTP_204_NO_CONTENT)
def delete_operating_day(
    target_date: date,
    admin: AdminService = Depends(get_admin_service),
):
    if not admin.remove_operating_day(target_date):
        raise HTTPException(status_code=404, detail="Not found")
