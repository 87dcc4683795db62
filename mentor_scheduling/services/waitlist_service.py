# mentor_scheduling/services/waitlist_service.py
import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..models import WaitlistEntry, WaitlistStatus
from ..schemas import WaitlistCreate
from ..constants import ErrorMessages
from ..exceptions import BusinessLogicError, DuplicateRequestError
from ..utils.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

class WaitlistService:
    def __init__(self, db: Session):
        self.db = db
        self.validator = ValidationUtils(db)

    def join_waitlist(self, startup_id: str, data: WaitlistCreate) -> WaitlistEntry:
        startup = self.validator.get_startup_or_404(startup_id)
        mentor = self.validator.get_mentor_or_404(data.mentor_id)
        self.validator.check_not_on_waitlist(startup.id, mentor.id)

        entry = WaitlistEntry(
            startup_id=startup.id,
            mentor_id=mentor.id,
            priority=data.priority,
            notes=data.notes,
            status=WaitlistStatus.PENDING.value,
        )
        try:
            self.db.add(entry)
            self.db.commit()
            self.db.refresh(entry)
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Database integrity error adding startup {startup_id} to waitlist: {e}")
            raise DuplicateRequestError(ErrorMessages.DUPLICATE_WAITLIST_ENTRY)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error adding startup {startup_id} to waitlist: {e}")
            raise BusinessLogicError("Failed to join waitlist")

        logger.info(f"Startup {startup.id} added to waitlist for mentor {mentor.id}")
        return entry

    def get_entries_for_startup(self, startup_id: str) -> List[WaitlistEntry]:
        self.validator.get_startup_or_404(startup_id)
        return self.db.query(WaitlistEntry).filter(
            WaitlistEntry.startup_id == startup_id
        ).order_by(WaitlistEntry.added_at.asc()).all()

    def get_entries_for_mentor(self, mentor_id: str) -> List[WaitlistEntry]:
        """Highest priority first, then first come first served"""
        self.validator.get_mentor_or_404(mentor_id)
        return self.db.query(WaitlistEntry).filter(
            WaitlistEntry.mentor_id == mentor_id
        ).order_by(WaitlistEntry.priority.desc(), WaitlistEntry.added_at.asc()).all()

    def update_status(self, entry_id: str, new_status: WaitlistStatus) -> WaitlistEntry:
        entry = self.validator.get_waitlist_entry_or_404(entry_id)
        self.validator.validate_waitlist_transition(entry, new_status)

        entry.status = new_status.value
        if new_status == WaitlistStatus.CONTACTED:
            entry.contacted_at = datetime.now(timezone.utc)

        try:
            self.db.add(entry)
            self.db.commit()
            self.db.refresh(entry)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error updating waitlist entry {entry_id}: {e}")
            raise BusinessLogicError("Failed to update waitlist entry")

        logger.info(f"Waitlist entry {entry.id} moved to {new_status.value}")
        return entry
