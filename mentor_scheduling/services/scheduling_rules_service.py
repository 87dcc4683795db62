# mentor_scheduling/services/scheduling_rules_service.py
import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Dict, List, Optional
from zoneinfo import ZoneInfo

from pydantic import ValidationError
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..models import SchedulingRule, MentorToggle, BookingWindow, MentorType
from ..schemas import (
    SchedulingConfig, SchedulingRuleRecord, MentorTypeVisibility, BookingWindowRecord, BookingWindowCreate
)
from ..config import get_settings
from ..constants import ErrorMessages
from ..core.booking_rules import BookingRuleEvaluator
from ..exceptions import BusinessLogicError, SchedulingConfigUnavailableError
from ..utils.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

def get_booking_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)

class SchedulingRulesService:
    """
    Loads scheduling rules, mentor type toggles and active booking windows into
    a validated snapshot and hands out evaluators over it. Also carries the
    admin controls that edit that configuration.
    """

    def __init__(self, db: Session, clock: Optional[Callable[[], datetime]] = None):
        self.db = db
        self.settings = get_settings()
        self.clock = clock
        self.validator = ValidationUtils(db)
        self._config: Optional[SchedulingConfig] = None

    @property
    def loading(self) -> bool:
        return self._config is None

    @property
    def config(self) -> SchedulingConfig:
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def evaluator(self) -> BookingRuleEvaluator:
        return BookingRuleEvaluator(
            self.config,
            booking_timezone=get_booking_timezone(self.settings.BOOKING_TIMEZONE),
            clock=self.clock,
            default_advance_booking_weeks=self.settings.DEFAULT_ADVANCE_BOOKING_WEEKS,
        )

    def load_config(self) -> SchedulingConfig:
        """Fetches rules, toggles and active windows and validates every row"""
        try:
            rules = self.db.query(SchedulingRule).all()
            toggles = self.db.query(MentorToggle).all()
            windows = self.db.query(BookingWindow).filter(BookingWindow.is_active == True).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching scheduling data: {e}")
            raise SchedulingConfigUnavailableError(ErrorMessages.CONFIG_UNAVAILABLE) from e

        try:
            config = SchedulingConfig(
                rules=[SchedulingRuleRecord.model_validate(rule) for rule in rules],
                visibility=[MentorTypeVisibility.model_validate(toggle) for toggle in toggles],
                booking_windows=[BookingWindowRecord.model_validate(window) for window in windows],
            )
        except ValidationError as e:
            logger.error(f"Invalid scheduling configuration row: {e}")
            raise SchedulingConfigUnavailableError(ErrorMessages.CONFIG_UNAVAILABLE) from e

        logger.debug(
            f"Loaded scheduling config: {len(config.rules)} rules, "
            f"{len(config.visibility)} toggles, {len(config.booking_windows)} active windows"
        )
        return config

    def refetch(self) -> SchedulingConfig:
        """Drops the current snapshot and reloads it, e.g. after an admin change"""
        self._config = None
        return self.config

    def booking_window_status(self) -> Dict[str, Any]:
        evaluator = self.evaluator
        now = evaluator.current_time()
        is_open = evaluator.is_within_booking_window(now)
        return {
            "is_open": is_open,
            "checked_at": now,
            "timezone": self.settings.BOOKING_TIMEZONE,
            "message": "Booking Window Open" if is_open else "Booking Window Closed",
        }

    def check_eligibility(self, mentor_type: MentorType, target_time: datetime) -> Dict[str, Any]:
        evaluator = self.evaluator
        now = evaluator.current_time()
        return {
            "mentor_type": mentor_type,
            "target_time": target_time,
            "is_visible": evaluator.is_mentor_type_visible(mentor_type),
            "within_booking_window": evaluator.is_within_booking_window(now),
            "can_book": evaluator.can_book_slot(mentor_type, target_time, now),
            "can_create": evaluator.can_create_slot(mentor_type, target_time, now),
            "advance_booking_weeks": evaluator.get_advance_booking_weeks(mentor_type),
        }

    # --- Admin controls ---

    def list_toggles(self) -> List[MentorToggle]:
        return self.db.query(MentorToggle).order_by(MentorToggle.mentor_type).all()

    def set_mentor_type_visibility(self, mentor_type: MentorType, is_visible: bool, updated_by: Optional[str] = None) -> MentorToggle:
        """Shows or hides a mentor type, creating its toggle row on first use"""
        try:
            toggle = self.db.query(MentorToggle).filter(MentorToggle.mentor_type == mentor_type.value).first()
            if toggle is None:
                toggle = MentorToggle(mentor_type=mentor_type.value)
            toggle.is_visible = is_visible
            toggle.updated_at = datetime.now(timezone.utc)
            toggle.updated_by = updated_by
            self.db.add(toggle)
            self.db.commit()
            self.db.refresh(toggle)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error updating visibility for {mentor_type.value}: {e}")
            raise BusinessLogicError("Failed to update mentor visibility")

        logger.info(f"{mentor_type.value} visibility set to {is_visible}")
        self.refetch()
        return toggle

    def list_booking_windows(self) -> List[BookingWindow]:
        return self.db.query(BookingWindow).order_by(BookingWindow.day_of_week, BookingWindow.start_time).all()

    def create_booking_window(self, data: BookingWindowCreate) -> BookingWindow:
        try:
            window = BookingWindow(**data.model_dump())
            self.db.add(window)
            self.db.commit()
            self.db.refresh(window)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error creating booking window: {e}")
            raise BusinessLogicError("Failed to create booking window")

        logger.info(f"Booking window {window.id} ({window.name}) created")
        self.refetch()
        return window

    def set_booking_window_active(self, window_id: str, is_active: bool) -> BookingWindow:
        window = self.validator.get_booking_window_or_404(window_id)
        try:
            window.is_active = is_active
            self.db.add(window)
            self.db.commit()
            self.db.refresh(window)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error updating booking window {window_id}: {e}")
            raise BusinessLogicError("Failed to update booking window")

        logger.info(f"Booking window {window.id} {'activated' if is_active else 'deactivated'}")
        self.refetch()
        return window

    def list_rules(self) -> List[SchedulingRule]:
        return self.db.query(SchedulingRule).order_by(SchedulingRule.mentor_type).all()

    def upsert_rule(self, mentor_type: MentorType, data: Dict[str, Any]) -> SchedulingRule:
        """Creates the rule for a mentor type or updates the provided fields only"""
        try:
            rule = self.db.query(SchedulingRule).filter(SchedulingRule.mentor_type == mentor_type.value).first()
            if rule is None:
                rule = SchedulingRule(mentor_type=mentor_type.value)
            for key, value in data.items():
                if hasattr(rule, key):
                    setattr(rule, key, value)
            self.db.add(rule)
            self.db.commit()
            self.db.refresh(rule)
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Database integrity error saving rule for {mentor_type.value}: {e}")
            raise BusinessLogicError("Database constraint violation - rule may already exist")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error saving rule for {mentor_type.value}: {e}")
            raise BusinessLogicError("Failed to save scheduling rule")

        logger.info(f"Scheduling rule for {mentor_type.value} saved")
        self.refetch()
        return rule
