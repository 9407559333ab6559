# grislo/routers/reservations.py
# No PATCH/DELETE: a reservation only moves confirmed → cancelled

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..deps import get_reservation_manager
from ..schemas.reservations import (
    CancelResponse,
    MyReservation,
    Reservation,
    ReservationCreate,
)
from ..services.reservations import (
    CancelResult,
    CapacityExceeded,
    ReservationManager,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.post("/", response_model=Reservation, status_code=status.HTTP_201_CREATED)
def create_reservation(
    data: ReservationCreate,
    manager: ReservationManager = Depends(get_reservation_manager),
):
    try:
        return manager.create(
            data.date,
            data.time,
            data.pickup_location,
            name=data.name,
            notes=data.notes,
        )
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CapacityExceeded as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/mine", response_model=list[MyReservation])
def list_my_reservations(
    manager: ReservationManager = Depends(get_reservation_manager),
):
    return manager.my_reservations()


@router.get("/{id}", response_model=Reservation)
def get_reservation(
    id: str,
    manager: ReservationManager = Depends(get_reservation_manager),
):
    obj = manager.find_by_id(id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post("/{id}/cancel", response_model=CancelResponse)
def cancel_reservation(
    id: str,
    manager: ReservationManager = Depends(get_reservation_manager),
):
    result = manager.cancel(id)
    if result is CancelResult.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Not found")
    if not result.ok:
        raise HTTPException(status_code=409, detail=result.value)
    return CancelResponse(id=id, result=result.value, cancelled=True)
