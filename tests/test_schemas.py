"""
Tests for the typed records that guard the evaluator's inputs.
"""
from datetime import time

import pytest
from pydantic import ValidationError

from mentor_scheduling.models import MentorType
from mentor_scheduling.schemas import (
    BookingWindowRecord, BookingWindowCreate, SchedulingRuleRecord, MentorTypeVisibility, parse_clock_time
)


class TestClockTime:

    @pytest.mark.parametrize("value,expected", [
        ("09:00", time(9, 0)),
        ("09:00:00", time(9, 0)),
        ("23:59:59", time(23, 59, 59)),
        ("00:00:00", time(0, 0)),
        (time(17, 30), time(17, 30)),
    ])
    def test_accepts_zero_padded_times(self, value, expected):
        assert parse_clock_time(value) == expected

    @pytest.mark.parametrize("value", ["9:00", "09:0", "24:00", "12:60", "12:00:60", "noon", "09:00:00.5", "", 900])
    def test_rejects_malformed_times(self, value):
        with pytest.raises(ValueError):
            parse_clock_time(value)


class TestBookingWindowRecord:

    def test_parses_string_times(self):
        window = BookingWindowRecord(day_of_week=1, start_time="09:00", end_time="17:00:00")
        assert window.start_time == time(9, 0)
        assert window.end_time == time(17, 0)

    def test_rejects_malformed_time(self):
        with pytest.raises(ValidationError, match="Malformed time of day"):
            BookingWindowRecord(day_of_week=1, start_time="9:00", end_time="17:00")

    @pytest.mark.parametrize("day", [-1, 7])
    def test_rejects_out_of_range_day(self, day):
        with pytest.raises(ValidationError):
            BookingWindowRecord(day_of_week=day, start_time="09:00", end_time="17:00")

    def test_rejects_end_before_start(self):
        with pytest.raises(ValidationError, match="end_time must not be before start_time"):
            BookingWindowRecord(day_of_week=1, start_time="17:00", end_time="09:00")

    def test_create_payload_uses_same_validation(self):
        with pytest.raises(ValidationError):
            BookingWindowCreate(name="Evening", day_of_week=2, start_time="7pm", end_time="21:00")


class TestSchedulingRuleRecord:

    def test_mentor_type_from_string(self):
        rule = SchedulingRuleRecord(mentor_type="founder_mentor", min_advance_booking_hours=12)
        assert rule.mentor_type == MentorType.FOUNDER_MENTOR
        assert rule.max_advance_booking_days is None

    def test_rejects_unknown_mentor_type(self):
        with pytest.raises(ValidationError):
            SchedulingRuleRecord(mentor_type="astrologer")

    def test_rejects_negative_values(self):
        with pytest.raises(ValidationError):
            SchedulingRuleRecord(mentor_type="coach", min_advance_booking_hours=-1)

    def test_records_are_immutable(self):
        toggle = MentorTypeVisibility(mentor_type="coach", is_visible=True)
        with pytest.raises(ValidationError):
            toggle.is_visible = False
