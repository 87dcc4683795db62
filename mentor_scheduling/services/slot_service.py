# mentor_scheduling/services/slot_service.py
import logging
from datetime import timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError

from ..models import TimeSlot, Mentor, MentorType
from ..schemas import TimeSlotCreate
from ..config import get_settings
from ..constants import ErrorMessages, SlotStatus
from ..core.booking_rules import as_aware
from ..exceptions import BusinessLogicError, SlotNotCreatableError
from ..utils.validation_utils import ValidationUtils
from ..utils.response_enricher import ResponseEnricher
from .scheduling_rules_service import SchedulingRulesService

logger = logging.getLogger(__name__)

MENTOR_TYPE_VALUES = {mentor_type.value for mentor_type in MentorType}

class SlotService:
    def __init__(self, db: Session, rules_service: Optional[SchedulingRulesService] = None):
        self.db = db
        self.settings = get_settings()
        self.validator = ValidationUtils(db)
        self.rules_service = rules_service or SchedulingRulesService(db)

    def create_slot(self, mentor_id: str, data: TimeSlotCreate) -> TimeSlot:
        """Creates a time slot for a mentor if the scheduling rules allow it"""
        mentor = self.validator.get_mentor_or_404(mentor_id)
        evaluator = self.rules_service.evaluator
        now = evaluator.current_time()
        start_time = as_aware(data.start_time)

        if start_time < now:
            raise SlotNotCreatableError(ErrorMessages.SLOT_IN_PAST)
        if not evaluator.can_create_slot(mentor.mentor_type, start_time, now):
            raise SlotNotCreatableError(ErrorMessages.SLOT_OUTSIDE_CREATION_WINDOW)

        rule = evaluator.get_rule_for_mentor_type(mentor.mentor_type)
        if data.is_recurring and not rule.allow_recurring:
            raise SlotNotCreatableError(ErrorMessages.RECURRING_NOT_ALLOWED)

        if data.end_time is not None:
            end_time = as_aware(data.end_time)
        else:
            duration = rule.default_duration_minutes or self.settings.DEFAULT_SLOT_DURATION_MINUTES
            end_time = start_time + timedelta(minutes=duration)
        if end_time <= start_time:
            raise BusinessLogicError(ErrorMessages.INVALID_SLOT_RANGE)

        try:
            slot = TimeSlot(
                mentor_id=mentor.id,
                start_time=start_time.astimezone(timezone.utc),
                end_time=end_time.astimezone(timezone.utc),
                is_available=True,
                is_recurring=data.is_recurring,
                recurrence_pattern=data.recurrence_pattern if data.is_recurring else None,
                status=SlotStatus.AVAILABLE,
            )
            self.db.add(slot)
            self.db.commit()
            self.db.refresh(slot)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error creating slot for mentor {mentor_id}: {e}")
            raise BusinessLogicError("Database error occurred while creating time slot")

        logger.info(f"Slot {slot.id} created for mentor {mentor_id} at {start_time.isoformat()}")
        return slot

    def list_available_slots(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Upcoming open slots, earliest first. Slots of hidden mentor types are left
        out; the rest carry a `can_book` flag for the current moment.
        """
        evaluator = self.rules_service.evaluator
        now = evaluator.current_time()

        slots = self.db.query(TimeSlot).options(
            joinedload(TimeSlot.mentor).joinedload(Mentor.profile)
        ).filter(
            TimeSlot.status == SlotStatus.AVAILABLE,
            TimeSlot.is_available == True,
            TimeSlot.start_time >= now.astimezone(timezone.utc)
        ).order_by(TimeSlot.start_time.asc()).limit(limit or self.settings.AVAILABLE_SLOTS_LIMIT).all()

        visible = []
        for slot in slots:
            if not slot.mentor:
                continue
            if slot.mentor.mentor_type not in MENTOR_TYPE_VALUES:
                logger.warning(f"Skipping slot {slot.id}: mentor {slot.mentor_id} has unknown mentor type '{slot.mentor.mentor_type}'")
                continue
            if evaluator.is_mentor_type_visible(slot.mentor.mentor_type):
                visible.append(slot)
        return ResponseEnricher.enrich_slots(visible, evaluator, now)

    def list_available_slots_grouped(self, limit: Optional[int] = None) -> Dict[str, List[Dict[str, Any]]]:
        return ResponseEnricher.group_slots_by_mentor_type(self.list_available_slots(limit))

    def get_slots_for_mentor(self, mentor_id: str) -> List[TimeSlot]:
        self.validator.get_mentor_or_404(mentor_id)
        return self.db.query(TimeSlot).filter(
            TimeSlot.mentor_id == mentor_id
        ).order_by(TimeSlot.start_time.asc()).all()
