# mentor_scheduling/constants.py
class ErrorMessages:
    MENTOR_NOT_FOUND = "Mentor not found"
    STARTUP_NOT_FOUND = "Startup profile not found"
    SLOT_NOT_FOUND = "Time slot not found"
    BOOKING_WINDOW_NOT_FOUND = "Booking window not found"
    WAITLIST_ENTRY_NOT_FOUND = "Waitlist entry not found"
    SLOT_UNAVAILABLE = "This slot is no longer available"
    SLOT_ALREADY_BOOKED = "This slot has already been booked"
    BOOKING_NOT_ALLOWED = "This slot cannot be booked at this time. Please check booking window restrictions."
    SLOT_OUTSIDE_CREATION_WINDOW = "Slot date is outside the slot creation window for this mentor type"
    SLOT_IN_PAST = "Slot cannot start in the past"
    RECURRING_NOT_ALLOWED = "Recurring slots are not allowed for this mentor type"
    INVALID_SLOT_RANGE = "Slot end time must be after its start time"
    DUPLICATE_WAITLIST_ENTRY = "Startup is already on this mentor's waitlist"
    CONFIG_UNAVAILABLE = "Scheduling configuration could not be loaded"

class SlotStatus:
    AVAILABLE = "available"
    BOOKED = "booked"

class AppointmentStatus:
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class BusinessRules:
    DEFAULT_APPOINTMENT_TITLE = "Mentoring Session"
    MIN_DAY_OF_WEEK = 0 # Sunday
    MAX_DAY_OF_WEEK = 6 # Saturday
    DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
    UNKNOWN_MENTOR_NAME = "Unknown Mentor"
    UNKNOWN_DAY_NAME = "Unknown"
