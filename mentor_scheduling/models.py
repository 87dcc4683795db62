# mentor_scheduling/models.py
import uuid
from enum import Enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Time, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .database import Base
from .constants import BusinessRules

def generate_uuid() -> str:
    return str(uuid.uuid4())

class MentorType(str, Enum):
    FOUNDER_MENTOR = "founder_mentor"
    EXPERT = "expert"
    COACH = "coach"

class UserRole(str, Enum):
    STARTUP = "startup"
    MENTOR = "mentor"
    TEAM = "team"

class WaitlistStatus(str, Enum):
    PENDING = "pending"
    CONTACTED = "contacted" # Operations team reached out to the startup
    SCHEDULED = "scheduled" # A call was booked from the waitlist

class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String, unique=True, index=True, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    role = Column(String, nullable=False, default=UserRole.STARTUP.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def display_name(self) -> str:
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.username

    def __repr__(self):
        return f"<Profile(id={self.id}, username='{self.username}', role='{self.role}')>"

class Mentor(Base):
    __tablename__ = "mentors"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)
    mentor_type = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    profile = relationship("Profile")
    time_slots = relationship("TimeSlot", back_populates="mentor", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Mentor(id={self.id}, mentor_type='{self.mentor_type}')>"

class Startup(Base):
    __tablename__ = "startups"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True)
    startup_name = Column(String, nullable=False)
    industry = Column(String, nullable=True)
    stage = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    profile = relationship("Profile")

    def __repr__(self):
        return f"<Startup(id={self.id}, startup_name='{self.startup_name}')>"

class SchedulingRule(Base):
    __tablename__ = "scheduling_rules"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    mentor_type = Column(String, unique=True, nullable=False)
    advance_booking_weeks = Column(Integer, nullable=True, default=1)
    slot_creation_window_weeks = Column(Integer, nullable=True, default=4)
    min_advance_booking_hours = Column(Integer, nullable=True, default=24)
    max_advance_booking_days = Column(Integer, nullable=True, default=30)
    max_sessions_per_week = Column(Integer, nullable=True)
    default_duration_minutes = Column(Integer, nullable=True, default=60)
    allow_recurring = Column(Boolean, nullable=True, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<SchedulingRule(mentor_type='{self.mentor_type}')>"

class MentorToggle(Base):
    __tablename__ = "mentor_toggles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    mentor_type = Column(String, unique=True, nullable=False)
    is_visible = Column(Boolean, nullable=False, default=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
    updated_by = Column(String(36), nullable=True)

    def __repr__(self):
        return f"<MentorToggle(mentor_type='{self.mentor_type}', is_visible={self.is_visible})>"

class BookingWindow(Base):
    __tablename__ = "booking_windows"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    day_of_week = Column(Integer, nullable=False) # 0 = Sunday ... 6 = Saturday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def day_name(self) -> str:
        if self.day_of_week is None or not BusinessRules.MIN_DAY_OF_WEEK <= self.day_of_week <= BusinessRules.MAX_DAY_OF_WEEK:
            return BusinessRules.UNKNOWN_DAY_NAME
        return BusinessRules.DAY_NAMES[self.day_of_week]

    def __repr__(self):
        return f"<BookingWindow(id={self.id}, day_of_week={self.day_of_week}, {self.start_time}-{self.end_time})>"

class TimeSlot(Base):
    __tablename__ = "time_slots"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    mentor_id = Column(String(36), ForeignKey("mentors.id", ondelete="CASCADE"), nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurrence_pattern = Column(String, nullable=True)
    status = Column(String, nullable=False, default="available")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    mentor = relationship("Mentor", back_populates="time_slots")

    def __repr__(self):
        return f"<TimeSlot(id={self.id}, mentor_id={self.mentor_id}, start_time={self.start_time}, status='{self.status}')>"

class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    startup_id = Column(String(36), ForeignKey("startups.id", ondelete="CASCADE"), nullable=False)
    mentor_id = Column(String(36), ForeignKey("mentors.id", ondelete="CASCADE"), nullable=False)
    # One appointment per slot; concurrent bookings are arbitrated by this constraint
    time_slot_id = Column(String(36), ForeignKey("time_slots.id", ondelete="SET NULL"), unique=True, nullable=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    scheduled_at = Column(DateTime(timezone=True), nullable=False, index=True)
    duration_minutes = Column(Integer, nullable=True)
    meeting_url = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="scheduled")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    mentor = relationship("Mentor")
    startup = relationship("Startup")
    time_slot = relationship("TimeSlot")

    def __repr__(self):
        return f"<Appointment(id={self.id}, startup_id={self.startup_id}, mentor_id={self.mentor_id}, status='{self.status}')>"

class WaitlistEntry(Base):
    __tablename__ = "waitlist"
    __table_args__ = (UniqueConstraint("startup_id", "mentor_id", name="uq_waitlist_startup_mentor"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    startup_id = Column(String(36), ForeignKey("startups.id", ondelete="CASCADE"), nullable=False)
    mentor_id = Column(String(36), ForeignKey("mentors.id", ondelete="CASCADE"), nullable=False)
    priority = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default=WaitlistStatus.PENDING.value)
    notes = Column(Text, nullable=True)
    added_at = Column(DateTime(timezone=True), server_default=func.now())
    contacted_at = Column(DateTime(timezone=True), nullable=True)

    mentor = relationship("Mentor")
    startup = relationship("Startup")

    def __repr__(self):
        return f"<WaitlistEntry(id={self.id}, startup_id={self.startup_id}, mentor_id={self.mentor_id}, status='{self.status}')>"
