# mentor_scheduling/routers/slot_router.py
from fastapi import APIRouter, Depends, HTTPException, Path, Query
from typing import List, Optional

from ..services import SlotService
from ..dependencies.service_dependencies import get_slot_service
from ..schemas import TimeSlotCreate, TimeSlotResponse, AvailableSlotResponse, GroupedSlotsResponse
from ..exceptions import BusinessLogicError, NotFoundError, SlotNotCreatableError

router = APIRouter(prefix="/api", tags=["slots"])

@router.post("/mentors/{mentor_id}/slots", response_model=TimeSlotResponse, status_code=201)
async def create_slot(
    mentor_id: str = Path(..., description="The ID of the mentor offering the slot"),
    slot_data: TimeSlotCreate = ...,
    slot_service: SlotService = Depends(get_slot_service)
):
    """Create a time slot within the mentor type's slot creation window"""
    try:
        return slot_service.create_slot(mentor_id, slot_data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SlotNotCreatableError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except BusinessLogicError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/mentors/{mentor_id}/slots", response_model=List[TimeSlotResponse])
async def get_mentor_slots(
    mentor_id: str = Path(..., description="The ID of the mentor"),
    slot_service: SlotService = Depends(get_slot_service)
):
    try:
        return slot_service.get_slots_for_mentor(mentor_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/slots/available", response_model=List[AvailableSlotResponse])
async def list_available_slots(
    limit: Optional[int] = Query(None, ge=1, le=200),
    slot_service: SlotService = Depends(get_slot_service)
):
    """Upcoming open slots of visible mentor types"""
    return slot_service.list_available_slots(limit)

@router.get("/slots/available/grouped", response_model=GroupedSlotsResponse)
async def list_available_slots_grouped(
    limit: Optional[int] = Query(None, ge=1, le=200),
    slot_service: SlotService = Depends(get_slot_service)
):
    """Upcoming open slots bucketed by mentor type"""
    return slot_service.list_available_slots_grouped(limit)
