# mentor_scheduling/utils/validation_utils.py
from sqlalchemy.orm import Session, joinedload
from ..models import Mentor, Startup, TimeSlot, BookingWindow, WaitlistEntry, WaitlistStatus
from ..constants import ErrorMessages, SlotStatus
from ..exceptions import NotFoundError, DuplicateRequestError, InvalidStatusTransitionError, SlotAlreadyBookedError

# Waitlist entries only move forward
WAITLIST_TRANSITIONS = {
    WaitlistStatus.PENDING: {WaitlistStatus.CONTACTED, WaitlistStatus.SCHEDULED},
    WaitlistStatus.CONTACTED: {WaitlistStatus.SCHEDULED},
    WaitlistStatus.SCHEDULED: set(),
}

class ValidationUtils:
    def __init__(self, db: Session):
        self.db = db

    def get_mentor_or_404(self, mentor_id: str) -> Mentor:
        mentor = self.db.query(Mentor).filter(Mentor.id == mentor_id).first()
        if not mentor:
            raise NotFoundError(ErrorMessages.MENTOR_NOT_FOUND)
        return mentor

    def get_startup_or_404(self, startup_id: str) -> Startup:
        startup = self.db.query(Startup).filter(Startup.id == startup_id).first()
        if not startup:
            raise NotFoundError(ErrorMessages.STARTUP_NOT_FOUND)
        return startup

    def get_slot_or_404(self, slot_id: str) -> TimeSlot:
        slot = self.db.query(TimeSlot).options(
            joinedload(TimeSlot.mentor).joinedload(Mentor.profile)
        ).filter(TimeSlot.id == slot_id).first()
        if not slot:
            raise NotFoundError(ErrorMessages.SLOT_NOT_FOUND)
        return slot

    def get_booking_window_or_404(self, window_id: str) -> BookingWindow:
        window = self.db.query(BookingWindow).filter(BookingWindow.id == window_id).first()
        if not window:
            raise NotFoundError(ErrorMessages.BOOKING_WINDOW_NOT_FOUND)
        return window

    def get_waitlist_entry_or_404(self, entry_id: str) -> WaitlistEntry:
        entry = self.db.query(WaitlistEntry).filter(WaitlistEntry.id == entry_id).first()
        if not entry:
            raise NotFoundError(ErrorMessages.WAITLIST_ENTRY_NOT_FOUND)
        return entry

    def validate_slot_available(self, slot: TimeSlot):
        if slot.status != SlotStatus.AVAILABLE or not slot.is_available:
            raise SlotAlreadyBookedError(ErrorMessages.SLOT_UNAVAILABLE)

    def check_not_on_waitlist(self, startup_id: str, mentor_id: str):
        existing = self.db.query(WaitlistEntry).filter(
            WaitlistEntry.startup_id == startup_id,
            WaitlistEntry.mentor_id == mentor_id
        ).first()

        if existing:
            raise DuplicateRequestError(ErrorMessages.DUPLICATE_WAITLIST_ENTRY)

    def validate_waitlist_transition(self, entry: WaitlistEntry, new_status: WaitlistStatus):
        current = WaitlistStatus(entry.status)
        if new_status not in WAITLIST_TRANSITIONS[current]:
            raise InvalidStatusTransitionError(f"Cannot move waitlist entry from {current.value} to {new_status.value}")
