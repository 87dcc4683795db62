import re
from datetime import datetime, time
from typing import Annotated, List, Optional
from pydantic import BaseModel, BeforeValidator, Field, model_validator
from .models import MentorType, WaitlistStatus

# Zero-padded 24h clock value, seconds optional ("09:00" or "09:00:00")
CLOCK_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")

def parse_clock_time(value):
    """Validates a booking-window time of day, rejecting anything that is not HH:MM[:SS]."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected a time of day, got {type(value).__name__}")
    match = CLOCK_TIME_PATTERN.match(value)
    if not match:
        raise ValueError(f"Malformed time of day '{value}', expected zero-padded HH:MM or HH:MM:SS")
    hours, minutes, seconds = match.groups()
    return time(int(hours), int(minutes), int(seconds or 0))

ClockTime = Annotated[time, BeforeValidator(parse_clock_time)]
DayOfWeek = Annotated[int, Field(ge=0, le=6, description="0 = Sunday ... 6 = Saturday")]

# --- Configuration Records (validated rows fed to the booking rule evaluator) ---

class SchedulingRuleRecord(BaseModel):
    mentor_type: MentorType
    advance_booking_weeks: Optional[int] = Field(None, ge=0)
    slot_creation_window_weeks: Optional[int] = Field(None, ge=0)
    min_advance_booking_hours: Optional[int] = Field(None, ge=0)
    max_advance_booking_days: Optional[int] = Field(None, ge=0)
    max_sessions_per_week: Optional[int] = Field(None, ge=0)
    default_duration_minutes: Optional[int] = Field(None, gt=0)
    allow_recurring: Optional[bool] = None

    model_config = {"from_attributes": True, "frozen": True}

class MentorTypeVisibility(BaseModel):
    mentor_type: MentorType
    is_visible: bool

    model_config = {"from_attributes": True, "frozen": True}

class BookingWindowRecord(BaseModel):
    day_of_week: DayOfWeek
    start_time: ClockTime
    end_time: ClockTime
    name: Optional[str] = None

    model_config = {"from_attributes": True, "frozen": True}

    @model_validator(mode="after")
    def check_range(self):
        if self.end_time < self.start_time:
            raise ValueError("Booking window end_time must not be before start_time")
        return self

class SchedulingConfig(BaseModel):
    """Snapshot of everything the booking rule evaluator needs."""
    rules: List[SchedulingRuleRecord] = []
    visibility: List[MentorTypeVisibility] = []
    booking_windows: List[BookingWindowRecord] = []

    model_config = {"frozen": True}

# --- Input Models ---

class BookingWindowCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    day_of_week: DayOfWeek
    start_time: ClockTime
    end_time: ClockTime
    is_active: bool = True

    @model_validator(mode="after")
    def check_range(self):
        if self.end_time < self.start_time:
            raise ValueError("Booking window end_time must not be before start_time")
        return self

class BookingWindowUpdate(BaseModel):
    is_active: bool

class MentorVisibilityUpdate(BaseModel):
    is_visible: bool
    updated_by: Optional[str] = Field(None, description="Profile ID of the team member making the change.")

class SchedulingRuleUpdate(BaseModel):
    advance_booking_weeks: Optional[int] = Field(None, ge=0)
    slot_creation_window_weeks: Optional[int] = Field(None, ge=0)
    min_advance_booking_hours: Optional[int] = Field(None, ge=0)
    max_advance_booking_days: Optional[int] = Field(None, ge=0)
    max_sessions_per_week: Optional[int] = Field(None, ge=0)
    default_duration_minutes: Optional[int] = Field(None, gt=0)
    allow_recurring: Optional[bool] = None

class TimeSlotCreate(BaseModel):
    start_time: datetime
    end_time: Optional[datetime] = Field(None, description="Defaults to start_time plus the rule's default duration.")
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = Field(None, description="e.g. 'weekly'. Only used for recurring slots.")

class WaitlistCreate(BaseModel):
    mentor_id: str
    priority: int = Field(0, ge=0)
    notes: Optional[str] = None

class WaitlistStatusUpdate(BaseModel):
    status: WaitlistStatus

# --- Output Models ---

class SchedulingRuleResponse(SchedulingRuleRecord):
    id: str

class MentorToggleResponse(BaseModel):
    id: str
    mentor_type: MentorType
    is_visible: bool
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}

class BookingWindowResponse(BaseModel):
    id: str
    name: str
    day_of_week: int
    day_name: str
    start_time: time
    end_time: time
    is_active: bool

    model_config = {"from_attributes": True}

class BookingWindowStatus(BaseModel):
    is_open: bool
    checked_at: datetime
    timezone: str
    message: str

class BookingEligibility(BaseModel):
    mentor_type: MentorType
    target_time: datetime
    is_visible: bool
    within_booking_window: bool
    can_book: bool
    can_create: bool
    advance_booking_weeks: int

class TimeSlotResponse(BaseModel):
    id: str
    mentor_id: str
    start_time: datetime
    end_time: datetime
    is_available: bool
    is_recurring: bool
    recurrence_pattern: Optional[str]
    status: str

    model_config = {"from_attributes": True}

class AvailableSlotResponse(TimeSlotResponse):
    mentor_type: MentorType
    mentor_name: str
    can_book: bool

class GroupedSlotsResponse(BaseModel):
    coach: List[AvailableSlotResponse] = []
    founder_mentor: List[AvailableSlotResponse] = []
    expert: List[AvailableSlotResponse] = []

class AppointmentResponse(BaseModel):
    id: str
    startup_id: str
    mentor_id: str
    time_slot_id: Optional[str]
    title: str
    scheduled_at: datetime
    duration_minutes: Optional[int]
    status: str

    model_config = {"from_attributes": True}

class UpcomingCall(BaseModel):
    id: str
    scheduled_at: datetime
    title: str
    participant: str
    status: str

class WaitlistEntryResponse(BaseModel):
    id: str
    startup_id: str
    mentor_id: str
    priority: int
    status: WaitlistStatus
    notes: Optional[str]
    added_at: Optional[datetime]
    contacted_at: Optional[datetime]

    model_config = {"from_attributes": True}
