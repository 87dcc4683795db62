from . import scheduling_router
from . import admin_router
from . import slot_router
from . import booking_router
from . import waitlist_router

__all__ = [
    "scheduling_router",
    "admin_router",
    "slot_router",
    "booking_router",
    "waitlist_router"
]
