# mentor_scheduling/utils/response_enricher.py
from datetime import datetime
from typing import Dict, Any, List, Optional
from ..models import Mentor, TimeSlot, Appointment, MentorType
from ..schemas import TimeSlotResponse
from ..constants import BusinessRules
from ..core.booking_rules import BookingRuleEvaluator

class ResponseEnricher:
    @staticmethod
    def mentor_display_name(mentor: Optional[Mentor]) -> str:
        if mentor and mentor.profile:
            return mentor.profile.display_name
        return BusinessRules.UNKNOWN_MENTOR_NAME

    @staticmethod
    def enrich_slots(slots: List[TimeSlot], evaluator: BookingRuleEvaluator, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """Adds mentor name/type and whether the slot is bookable right now"""
        enriched = []
        for slot in slots:
            slot_dict = TimeSlotResponse.model_validate(slot).model_dump()
            mentor_type = slot.mentor.mentor_type if slot.mentor else MentorType.EXPERT.value
            slot_dict['mentor_type'] = mentor_type
            slot_dict['mentor_name'] = ResponseEnricher.mentor_display_name(slot.mentor)
            slot_dict['can_book'] = evaluator.can_book_slot(mentor_type, slot.start_time, now)
            enriched.append(slot_dict)
        return enriched

    @staticmethod
    def group_slots_by_mentor_type(slots: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
        grouped = {mentor_type.value: [] for mentor_type in (MentorType.COACH, MentorType.FOUNDER_MENTOR, MentorType.EXPERT)}
        for slot in slots:
            mentor_type = slot['mentor_type']
            key = mentor_type.value if isinstance(mentor_type, MentorType) else mentor_type
            if key in grouped:
                grouped[key].append(slot)
        return grouped

    @staticmethod
    def enrich_upcoming_calls(appointments: List[Appointment]) -> List[Dict[str, Any]]:
        """Shapes appointments as upcoming calls with the mentor as participant"""
        return [
            {
                'id': appointment.id,
                'scheduled_at': appointment.scheduled_at,
                'title': appointment.title,
                'participant': ResponseEnricher.mentor_display_name(appointment.mentor),
                'status': appointment.status,
            }
            for appointment in appointments
        ]
