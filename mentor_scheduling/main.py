# mentor_scheduling/main.py
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from .config import get_settings
from .database import create_db_and_tables, SessionLocal
from .exceptions import SchedulingConfigUnavailableError
from .services.scheduling_rules_service import SchedulingRulesService
from .routers import scheduling_router, admin_router, slot_router, booking_router, waitlist_router

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mentor Scheduling API",
    description="Booking-eligibility rules, slots and appointments for startup/mentor sessions.",
    version="1.0.0",
)

# Include routers
app.include_router(scheduling_router.router)
app.include_router(admin_router.router)
app.include_router(slot_router.router)
app.include_router(booking_router.router)
app.include_router(waitlist_router.router)

@app.exception_handler(SchedulingConfigUnavailableError)
async def scheduling_config_unavailable_handler(request: Request, exc: SchedulingConfigUnavailableError):
    # Rules could not be evaluated: report unavailability instead of denying
    return JSONResponse(status_code=503, content={"detail": str(exc)})

@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info("Application startup event triggered.")
    try:
        if settings.DB_CREATE_TABLES:
            create_db_and_tables()

        with SessionLocal() as db:
            config = SchedulingRulesService(db).load_config()
            logger.info(
                f"Scheduling config loaded: {len(config.rules)} rules, "
                f"{len(config.visibility)} toggles, {len(config.booking_windows)} active booking windows"
            )

        logger.info("Startup sequence completed successfully.")
    except Exception as e:
        logger.critical(f"Critical error during startup: {e}", exc_info=True)

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
            config = SchedulingRulesService(db).load_config()

        return {
            "status": "healthy",
            "scheduling": {
                "rules": len(config.rules),
                "toggles": len(config.visibility),
                "active_booking_windows": len(config.booking_windows),
            },
            "booking_timezone": settings.BOOKING_TIMEZONE
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "unhealthy", "error": str(e)}
