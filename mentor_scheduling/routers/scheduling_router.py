# mentor_scheduling/routers/scheduling_router.py
from datetime import datetime
from fastapi import APIRouter, Depends, Query

from ..services import SchedulingRulesService
from ..dependencies.service_dependencies import get_scheduling_rules_service
from ..schemas import SchedulingConfig, BookingWindowStatus, BookingEligibility, MentorTypeVisibility
from ..models import MentorType

router = APIRouter(prefix="/api/scheduling", tags=["scheduling"])

@router.get("/config", response_model=SchedulingConfig)
async def get_scheduling_config(
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    """Current rules, visibility toggles and active booking windows"""
    return rules_service.config

@router.get("/booking-window/status", response_model=BookingWindowStatus)
async def get_booking_window_status(
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    """Whether bookings are currently being accepted"""
    return rules_service.booking_window_status()

@router.get("/mentor-types/{mentor_type}/visibility", response_model=MentorTypeVisibility)
async def get_mentor_type_visibility(
    mentor_type: MentorType,
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    return {
        "mentor_type": mentor_type,
        "is_visible": rules_service.evaluator.is_mentor_type_visible(mentor_type),
    }

@router.get("/eligibility", response_model=BookingEligibility)
async def check_eligibility(
    mentor_type: MentorType = Query(..., description="Mentor category to evaluate"),
    target_time: datetime = Query(..., description="Slot start to check for creation/booking"),
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
):
    """Evaluates every booking rule for a mentor type and time"""
    return rules_service.check_eligibility(mentor_type, target_time)
