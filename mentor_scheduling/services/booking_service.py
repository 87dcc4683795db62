# mentor_scheduling/services/booking_service.py
import logging
from datetime import timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..models import Appointment, Mentor
from ..constants import ErrorMessages, SlotStatus, AppointmentStatus, BusinessRules
from ..exceptions import BusinessLogicError, BookingNotAllowedError, SlotAlreadyBookedError
from ..utils.validation_utils import ValidationUtils
from ..utils.response_enricher import ResponseEnricher
from .scheduling_rules_service import SchedulingRulesService

logger = logging.getLogger(__name__)

class BookingService:
    def __init__(self, db: Session, rules_service: Optional[SchedulingRulesService] = None):
        self.db = db
        self.validator = ValidationUtils(db)
        self.rules_service = rules_service or SchedulingRulesService(db)

    def book_slot(self, startup_id: str, slot_id: str) -> Appointment:
        """Books a slot for a startup, turning it into a scheduled appointment"""
        startup = self.validator.get_startup_or_404(startup_id)
        slot = self.validator.get_slot_or_404(slot_id)
        self.validator.validate_slot_available(slot)

        if not self.rules_service.evaluator.can_book_slot(slot.mentor.mentor_type, slot.start_time):
            raise BookingNotAllowedError(ErrorMessages.BOOKING_NOT_ALLOWED)

        duration_minutes = int((slot.end_time - slot.start_time).total_seconds() // 60)
        appointment = Appointment(
            startup_id=startup.id,
            mentor_id=slot.mentor_id,
            time_slot_id=slot.id,
            scheduled_at=slot.start_time,
            duration_minutes=duration_minutes,
            title=BusinessRules.DEFAULT_APPOINTMENT_TITLE,
            status=AppointmentStatus.SCHEDULED,
        )
        slot.is_available = False
        slot.status = SlotStatus.BOOKED

        try:
            self.db.add_all([appointment, slot])
            self.db.commit()
            self.db.refresh(appointment)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Slot {slot_id} was booked concurrently: {e}")
            raise SlotAlreadyBookedError(ErrorMessages.SLOT_ALREADY_BOOKED)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error booking slot {slot_id}: {e}")
            raise BusinessLogicError("Failed to schedule the call. Please try again.")

        logger.info(f"Slot {slot.id} booked by startup {startup.id} (appointment {appointment.id})")
        return appointment

    def get_upcoming_calls(self, startup_id: str) -> List[Dict[str, Any]]:
        """Scheduled calls for a startup from now on, soonest first"""
        self.validator.get_startup_or_404(startup_id)
        now = self.rules_service.evaluator.current_time()

        appointments = self.db.query(Appointment).options(
            joinedload(Appointment.mentor).joinedload(Mentor.profile)
        ).filter(
            Appointment.startup_id == startup_id,
            Appointment.status == AppointmentStatus.SCHEDULED,
            Appointment.scheduled_at >= now.astimezone(timezone.utc)
        ).order_by(Appointment.scheduled_at.asc()).all()

        return ResponseEnricher.enrich_upcoming_calls(appointments)
