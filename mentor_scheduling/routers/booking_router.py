# mentor_scheduling/routers/booking_router.py
from fastapi import APIRouter, Depends, HTTPException, Path
from typing import List

from ..services import BookingService
from ..dependencies.service_dependencies import get_booking_service
from ..schemas import AppointmentResponse, UpcomingCall
from ..exceptions import BusinessLogicError, NotFoundError, SlotAlreadyBookedError, BookingNotAllowedError

router = APIRouter(prefix="/api", tags=["bookings"])

@router.post("/startups/{startup_id}/slots/{slot_id}/book", response_model=AppointmentResponse, status_code=201)
async def book_slot(
    startup_id: str = Path(..., description="The ID of the startup booking the call"),
    slot_id: str = Path(..., description="The ID of the time slot"),
    booking_service: BookingService = Depends(get_booking_service)
):
    """Book a mentor's slot as a mentoring session"""
    try:
        return booking_service.book_slot(startup_id, slot_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SlotAlreadyBookedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except BookingNotAllowedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except BusinessLogicError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/startups/{startup_id}/upcoming-calls", response_model=List[UpcomingCall])
async def get_upcoming_calls(
    startup_id: str = Path(..., description="The ID of the startup"),
    booking_service: BookingService = Depends(get_booking_service)
):
    try:
        return booking_service.get_upcoming_calls(startup_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
