import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Callable, Dict, Optional, Tuple, Union

from ..models import MentorType
from ..schemas import SchedulingConfig, SchedulingRuleRecord

logger = logging.getLogger(__name__)

MentorTypeLike = Union[MentorType, str]

DEFAULT_ADVANCE_BOOKING_WEEKS = 1

def _type_key(mentor_type: MentorTypeLike) -> str:
    return mentor_type.value if isinstance(mentor_type, MentorType) else str(mentor_type)

def as_aware(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC, which is how the data store hands them back."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)

class BookingRuleEvaluator:
    """
    Answers "can a slot be created/booked for mentor type T at time D?" from a
    configuration snapshot. Every method is side-effect free; `now` may be passed
    explicitly, otherwise the injected clock is read once per call.
    """

    def __init__(
        self,
        config: SchedulingConfig,
        booking_timezone: tzinfo = timezone.utc,
        clock: Optional[Callable[[], datetime]] = None,
        default_advance_booking_weeks: int = DEFAULT_ADVANCE_BOOKING_WEEKS,
    ):
        self.config = config
        self.booking_timezone = booking_timezone
        self.clock = clock or _utc_now
        self.default_advance_booking_weeks = default_advance_booking_weeks
        self._rules: Dict[str, SchedulingRuleRecord] = {_type_key(r.mentor_type): r for r in config.rules}
        self._visibility: Dict[str, bool] = {_type_key(t.mentor_type): t.is_visible for t in config.visibility}

    def current_time(self, now: Optional[datetime] = None) -> datetime:
        return as_aware(now if now is not None else self.clock())

    def get_rule_for_mentor_type(self, mentor_type: MentorTypeLike) -> Optional[SchedulingRuleRecord]:
        return self._rules.get(_type_key(mentor_type))

    def is_mentor_type_visible(self, mentor_type: MentorTypeLike) -> bool:
        """Visible unless a toggle explicitly hides the type."""
        return self._visibility.get(_type_key(mentor_type), True)

    def is_within_booking_window(self, now: Optional[datetime] = None) -> bool:
        """
        True when `now` falls inside any active booking window, both ends inclusive.
        With no windows configured there is no restriction at all.
        """
        if not self.config.booking_windows:
            return True

        local_now = self.current_time(now).astimezone(self.booking_timezone)
        current_day = (local_now.weekday() + 1) % 7 # 0 = Sunday, matching stored day_of_week
        time_of_day = local_now.time().replace(microsecond=0)

        return any(
            window.day_of_week == current_day and window.start_time <= time_of_day <= window.end_time
            for window in self.config.booking_windows
        )

    def can_create_slot(self, mentor_type: MentorTypeLike, target_date: datetime, now: Optional[datetime] = None) -> bool:
        rule = self.get_rule_for_mentor_type(mentor_type)
        if not rule:
            return False

        max_date = self.current_time(now) + timedelta(weeks=rule.slot_creation_window_weeks or 0)
        return as_aware(target_date) <= max_date

    def booking_range(self, mentor_type: MentorTypeLike, now: Optional[datetime] = None) -> Optional[Tuple[datetime, datetime]]:
        """Earliest and latest bookable start for the type, or None when it has no rule."""
        rule = self.get_rule_for_mentor_type(mentor_type)
        if not rule:
            return None

        current = self.current_time(now)
        min_date = current + timedelta(hours=rule.min_advance_booking_hours or 0)
        max_date = current + timedelta(days=rule.max_advance_booking_days or 0)
        return min_date, max_date

    def can_book_slot(self, mentor_type: MentorTypeLike, slot_date: datetime, now: Optional[datetime] = None) -> bool:
        current = self.current_time(now)

        if not self.is_mentor_type_visible(mentor_type):
            logger.debug(f"Booking denied: mentor type '{_type_key(mentor_type)}' is hidden")
            return False
        if not self.is_within_booking_window(current):
            logger.debug("Booking denied: outside of booking windows")
            return False

        bounds = self.booking_range(mentor_type, current)
        if bounds is None:
            logger.debug(f"Booking denied: no scheduling rule for '{_type_key(mentor_type)}'")
            return False

        min_date, max_date = bounds
        return min_date <= as_aware(slot_date) <= max_date

    def get_advance_booking_weeks(self, mentor_type: MentorTypeLike) -> int:
        rule = self.get_rule_for_mentor_type(mentor_type)
        if rule and rule.advance_booking_weeks is not None:
            return rule.advance_booking_weeks
        return self.default_advance_booking_weeks
