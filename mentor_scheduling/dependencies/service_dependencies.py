# mentor_scheduling/dependencies/service_dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session
from ..database import get_db
from ..services.scheduling_rules_service import SchedulingRulesService
from ..services.slot_service import SlotService
from ..services.booking_service import BookingService
from ..services.waitlist_service import WaitlistService

def get_scheduling_rules_service(db: Session = Depends(get_db)) -> SchedulingRulesService:
    return SchedulingRulesService(db)

def get_slot_service(
    db: Session = Depends(get_db),
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
) -> SlotService:
    return SlotService(db, rules_service)

def get_booking_service(
    db: Session = Depends(get_db),
    rules_service: SchedulingRulesService = Depends(get_scheduling_rules_service)
) -> BookingService:
    return BookingService(db, rules_service)

def get_waitlist_service(db: Session = Depends(get_db)) -> WaitlistService:
    return WaitlistService(db)
