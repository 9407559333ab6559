# grislo/routers/pickup_locations.py
# Append/remove only; no update-in-place

from fastapi import APIRouter, Depends, HTTPException, status

from ..deps import get_admin_service, get_snapshot
from ..schemas.pickup_locations import PickupLocation, PickupLocationCreate
from ..services.admin import AdminService
from ..services.availability import Snapshot
from ..services.reservations import ValidationFailure

router = APIRouter(prefix="/pickup-locations", tags=["pickup_locations"])


@router.get("/", response_model=list[PickupLocation])
def list_pickup_locations(snapshot: Snapshot = Depends(get_snapshot)):
    return list(snapshot.pickup_locations)


@router.post("/", response_model=PickupLocation, status_code=status.HTTP_201_CREATED)
def create_pickup_location(
    data: PickupLocationCreate,
    admin: AdminService = Depends(get_admin_service),
):
    try:
        return admin.add_pickup_location(data.name, data.address)
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pickup_location(
    id: str,
    admin: AdminService = Depends(get_admin_service),
):
    if not admin.remove_pickup_location(id):
        raise HTTPException(status_code=404, detail="Not found")
