# mentor_scheduling/services/__init__.py
from .scheduling_rules_service import SchedulingRulesService
from .slot_service import SlotService
from .booking_service import BookingService
from .waitlist_service import WaitlistService

__all__ = ["SchedulingRulesService", "SlotService", "BookingService", "WaitlistService"]
