# mentor_scheduling/routers/waitlist_router.py
from fastapi import APIRouter, Depends, HTTPException, Path
from typing import List

from ..services import WaitlistService
from ..dependencies.service_dependencies import get_waitlist_service
from ..schemas import WaitlistCreate, WaitlistEntryResponse, WaitlistStatusUpdate
from ..exceptions import BusinessLogicError, NotFoundError, DuplicateRequestError

router = APIRouter(prefix="/api", tags=["waitlist"])

@router.post("/startups/{startup_id}/waitlist", response_model=WaitlistEntryResponse, status_code=201)
async def join_waitlist(
    startup_id: str = Path(..., description="The ID of the startup joining the waitlist"),
    entry_data: WaitlistCreate = ...,
    waitlist_service: WaitlistService = Depends(get_waitlist_service)
):
    """Add a startup to a mentor's waitlist"""
    try:
        return waitlist_service.join_waitlist(startup_id, entry_data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateRequestError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except BusinessLogicError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/startups/{startup_id}/waitlist", response_model=List[WaitlistEntryResponse])
async def get_startup_waitlist(
    startup_id: str = Path(..., description="The ID of the startup"),
    waitlist_service: WaitlistService = Depends(get_waitlist_service)
):
    try:
        return waitlist_service.get_entries_for_startup(startup_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/mentors/{mentor_id}/waitlist", response_model=List[WaitlistEntryResponse])
async def get_mentor_waitlist(
    mentor_id: str = Path(..., description="The ID of the mentor"),
    waitlist_service: WaitlistService = Depends(get_waitlist_service)
):
    try:
        return waitlist_service.get_entries_for_mentor(mentor_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/waitlist/{entry_id}/status", response_model=WaitlistEntryResponse)
async def update_waitlist_status(
    entry_id: str = Path(..., description="The ID of the waitlist entry"),
    update: WaitlistStatusUpdate = ...,
    waitlist_service: WaitlistService = Depends(get_waitlist_service)
):
    """Move a waitlist entry to contacted or scheduled"""
    try:
        return waitlist_service.update_status(entry_id, update.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BusinessLogicError as e:
        raise HTTPException(status_code=400, detail=str(e))
