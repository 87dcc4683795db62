import os

# Must be set before the package creates its engine
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, time, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from mentor_scheduling.database import Base, engine, SessionLocal, get_db
from mentor_scheduling.main import app
from mentor_scheduling.dependencies.service_dependencies import get_scheduling_rules_service
from mentor_scheduling.services import SchedulingRulesService
from mentor_scheduling.models import (
    Profile, Mentor, Startup, SchedulingRule, MentorToggle, BookingWindow, TimeSlot, MentorType
)

# Monday 2 June 2025, 10:00 UTC
FIXED_NOW = datetime(2025, 6, 2, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def rules_service(db, clock):
    return SchedulingRulesService(db, clock=clock)


@pytest.fixture
def client(db, clock):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_scheduling_rules_service] = lambda: SchedulingRulesService(db, clock=clock)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_mentor(db):
    def _make(mentor_type=MentorType.COACH, username=None, first_name=None, last_name=None):
        type_value = mentor_type.value if isinstance(mentor_type, MentorType) else mentor_type
        profile = Profile(
            username=username or f"mentor-{type_value}-{db.query(Profile).count()}",
            first_name=first_name,
            last_name=last_name,
            role="mentor",
        )
        mentor = Mentor(profile=profile, mentor_type=type_value)
        db.add(mentor)
        db.commit()
        db.refresh(mentor)
        return mentor
    return _make


@pytest.fixture
def make_startup(db):
    def _make(name="Acme Robotics"):
        profile = Profile(username=f"startup-{db.query(Profile).count()}", role="startup")
        startup = Startup(profile=profile, startup_name=name)
        db.add(startup)
        db.commit()
        db.refresh(startup)
        return startup
    return _make


@pytest.fixture
def make_rule(db):
    def _make(mentor_type=MentorType.COACH, **fields):
        values = {
            "advance_booking_weeks": 1,
            "slot_creation_window_weeks": 2,
            "min_advance_booking_hours": 24,
            "max_advance_booking_days": 30,
            "default_duration_minutes": 60,
            "allow_recurring": False,
        }
        values.update(fields)
        rule = SchedulingRule(mentor_type=mentor_type.value, **values)
        db.add(rule)
        db.commit()
        return rule
    return _make


@pytest.fixture
def make_toggle(db):
    def _make(mentor_type, is_visible):
        toggle = MentorToggle(mentor_type=mentor_type.value if isinstance(mentor_type, MentorType) else mentor_type,
                              is_visible=is_visible)
        db.add(toggle)
        db.commit()
        return toggle
    return _make


@pytest.fixture
def make_window(db):
    def _make(day_of_week=1, start=time(9, 0), end=time(17, 0), is_active=True, name="Weekday hours"):
        window = BookingWindow(name=name, day_of_week=day_of_week, start_time=start, end_time=end, is_active=is_active)
        db.add(window)
        db.commit()
        db.refresh(window)
        return window
    return _make


@pytest.fixture
def make_slot(db):
    def _make(mentor, start, minutes=60, status="available", is_available=True):
        slot = TimeSlot(
            mentor_id=mentor.id,
            start_time=start,
            end_time=start + timedelta(minutes=minutes),
            status=status,
            is_available=is_available,
        )
        db.add(slot)
        db.commit()
        db.refresh(slot)
        return slot
    return _make
