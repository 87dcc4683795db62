# mentor_scheduling/exceptions.py
class BusinessLogicError(Exception):
    """Base exception for business logic errors"""
    pass

class NotFoundError(BusinessLogicError):
    """Raised when a resource is not found"""
    pass

class InvalidStatusTransitionError(BusinessLogicError):
    """Raised when invalid status transition is attempted"""
    pass

class DuplicateRequestError(BusinessLogicError):
    """Raised when duplicate request is attempted"""
    pass

class SlotNotCreatableError(BusinessLogicError):
    """Raised when a slot falls outside what the scheduling rules permit"""
    pass

class BookingNotAllowedError(BusinessLogicError):
    """Raised when the scheduling rules deny a booking"""
    pass

class SlotAlreadyBookedError(BusinessLogicError):
    """Raised when a slot is taken before the booking could be stored"""
    pass

class SchedulingConfigUnavailableError(Exception):
    """Raised when scheduling rules, toggles or windows cannot be loaded (served as 503, never as a denial)"""
    pass
