# mentor_scheduling/routers/admin_router.py
from fastapi import APIRouter, Depends, HTTPException, Path
from typing import List

from ..services import SchedulingRulesService
from ..dependencies.service_dependencies import get_scheduling_rules_service
from ..schemas import (
    MentorToggleResponse, MentorVisibilityUpdate, BookingWindowResponse, BookingWindowCreate,
    BookingWindowUpdate, SchedulingRuleResponse, SchedulingRuleUpdate
)
from ..models import MentorType
from ..exceptions import BusinessLogicError, NotFoundError

router = APIRouter(prefix="/api/admin", tags=["admin"])

@router.get("/toggles", response_model=List[MentorToggleResponse])
async def list_mentor_toggles(
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    """Mentor type visibility toggles"""
    return rules_service.list_toggles()

@router.put("/toggles/{mentor_type}", response_model=MentorToggleResponse)
async def update_mentor_toggle(
    mentor_type: MentorType,
    update: MentorVisibilityUpdate,
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    """Show or hide a mentor type from booking users"""
    try:
        return rules_service.set_mentor_type_visibility(mentor_type, update.is_visible, update.updated_by)
    except BusinessLogicError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/booking-windows", response_model=List[BookingWindowResponse])
async def list_booking_windows(
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    """All booking windows, active or not, by day of week"""
    return rules_service.list_booking_windows()

@router.post("/booking-windows", response_model=BookingWindowResponse, status_code=201)
async def create_booking_window(
    window_data: BookingWindowCreate,
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    try:
        return rules_service.create_booking_window(window_data)
    except BusinessLogicError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.put("/booking-windows/{window_id}", response_model=BookingWindowResponse)
async def update_booking_window(
    window_id: str = Path(..., description="The ID of the booking window"),
    update: BookingWindowUpdate = ...,
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    """Activate or deactivate a booking window"""
    try:
        return rules_service.set_booking_window_active(window_id, update.is_active)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BusinessLogicError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/rules", response_model=List[SchedulingRuleResponse])
async def list_scheduling_rules(
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    return rules_service.list_rules()

@router.put("/rules/{mentor_type}", response_model=SchedulingRuleResponse)
async def upsert_scheduling_rule(
    mentor_type: MentorType,
    rule_data: SchedulingRuleUpdate,
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    """Create the rule for a mentor type or update the fields provided"""
    try:
        return rules_service.upsert_rule(mentor_type, rule_data.model_dump(exclude_unset=True))
    except BusinessLogicError as e:
        raise HTTPException(status_code=400, detail=str(e))
