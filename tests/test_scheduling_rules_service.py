"""
Tests for loading the scheduling configuration and the admin controls.
"""
from datetime import time, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from mentor_scheduling.models import MentorType, MentorToggle, SchedulingRule
from mentor_scheduling.schemas import BookingWindowCreate
from mentor_scheduling.exceptions import SchedulingConfigUnavailableError, NotFoundError


class TestLoadConfig:

    def test_empty_tables_give_empty_config(self, rules_service):
        assert rules_service.loading is True
        config = rules_service.config
        assert config.rules == []
        assert config.visibility == []
        assert config.booking_windows == []
        assert rules_service.loading is False

    def test_loads_rules_toggles_and_active_windows_only(self, rules_service, make_rule, make_toggle, make_window):
        make_rule(MentorType.COACH)
        make_toggle(MentorType.EXPERT, False)
        make_window(day_of_week=1, name="Monday")
        make_window(day_of_week=2, name="Tuesday", is_active=False)

        config = rules_service.load_config()

        assert [rule.mentor_type for rule in config.rules] == [MentorType.COACH]
        assert config.visibility[0].mentor_type == MentorType.EXPERT
        assert config.visibility[0].is_visible is False
        assert len(config.booking_windows) == 1
        assert config.booking_windows[0].day_of_week == 1
        assert config.booking_windows[0].start_time == time(9, 0)

    def test_snapshot_is_kept_until_refetch(self, rules_service, make_toggle):
        assert rules_service.evaluator.is_mentor_type_visible(MentorType.COACH) is True
        make_toggle(MentorType.COACH, False)

        assert rules_service.evaluator.is_mentor_type_visible(MentorType.COACH) is True
        rules_service.refetch()
        assert rules_service.evaluator.is_mentor_type_visible(MentorType.COACH) is False

    def test_invalid_row_makes_config_unavailable(self, rules_service, make_window):
        make_window(start=time(17, 0), end=time(9, 0))
        with pytest.raises(SchedulingConfigUnavailableError):
            rules_service.load_config()

    def test_unknown_mentor_type_row_makes_config_unavailable(self, rules_service, make_toggle):
        make_toggle("astrologer", True)
        with pytest.raises(SchedulingConfigUnavailableError):
            rules_service.load_config()

    def test_database_error_makes_config_unavailable(self, rules_service, monkeypatch):
        def failing_query(*args, **kwargs):
            raise OperationalError("SELECT * FROM scheduling_rules", {}, Exception("connection lost"))

        monkeypatch.setattr(rules_service.db, "query", failing_query)
        with pytest.raises(SchedulingConfigUnavailableError):
            rules_service.load_config()
        assert rules_service.loading is True


class TestBookingWindowStatus:

    def test_open_without_windows(self, rules_service):
        status = rules_service.booking_window_status()
        assert status["is_open"] is True
        assert status["message"] == "Booking Window Open"
        assert status["timezone"] == "UTC"

    def test_closed_outside_windows(self, rules_service, make_window):
        make_window(day_of_week=3)
        status = rules_service.booking_window_status()
        assert status["is_open"] is False
        assert status["message"] == "Booking Window Closed"


class TestEligibility:

    def test_reports_each_rule(self, rules_service, make_rule, clock):
        make_rule(MentorType.COACH, advance_booking_weeks=2)
        result = rules_service.check_eligibility(MentorType.COACH, clock() + timedelta(days=3))

        assert result["is_visible"] is True
        assert result["within_booking_window"] is True
        assert result["can_book"] is True
        assert result["can_create"] is True
        assert result["advance_booking_weeks"] == 2


class TestAdminControls:

    def test_set_visibility_creates_missing_toggle(self, rules_service, db):
        toggle = rules_service.set_mentor_type_visibility(MentorType.FOUNDER_MENTOR, False, updated_by="ops-1")

        assert toggle.is_visible is False
        assert toggle.updated_by == "ops-1"
        assert db.query(MentorToggle).count() == 1
        assert rules_service.evaluator.is_mentor_type_visible(MentorType.FOUNDER_MENTOR) is False

    def test_set_visibility_updates_existing_toggle(self, rules_service, make_toggle, db):
        make_toggle(MentorType.COACH, False)
        rules_service.set_mentor_type_visibility(MentorType.COACH, True)

        assert db.query(MentorToggle).count() == 1
        assert rules_service.evaluator.is_mentor_type_visible(MentorType.COACH) is True

    def test_list_toggles_ordered_by_type(self, rules_service, make_toggle):
        make_toggle(MentorType.FOUNDER_MENTOR, True)
        make_toggle(MentorType.COACH, True)
        make_toggle(MentorType.EXPERT, False)
        assert [t.mentor_type for t in rules_service.list_toggles()] == ["coach", "expert", "founder_mentor"]

    def test_create_booking_window_refreshes_snapshot(self, rules_service):
        assert rules_service.evaluator.is_within_booking_window() is True
        rules_service.create_booking_window(
            BookingWindowCreate(name="Friday mornings", day_of_week=5, start_time="09:00", end_time="12:00")
        )
        assert len(rules_service.config.booking_windows) == 1
        assert rules_service.evaluator.is_within_booking_window() is False

    def test_deactivating_last_window_reopens_booking(self, rules_service, make_window):
        window = make_window(day_of_week=5)
        assert rules_service.evaluator.is_within_booking_window() is False

        updated = rules_service.set_booking_window_active(window.id, False)
        assert updated.is_active is False
        assert rules_service.evaluator.is_within_booking_window() is True

    def test_set_active_on_missing_window(self, rules_service):
        with pytest.raises(NotFoundError):
            rules_service.set_booking_window_active("missing", True)

    def test_list_booking_windows_includes_inactive(self, rules_service, make_window):
        make_window(day_of_week=4, name="Thursday")
        make_window(day_of_week=2, name="Tuesday", is_active=False)
        windows = rules_service.list_booking_windows()
        assert [w.name for w in windows] == ["Tuesday", "Thursday"]
        assert windows[0].day_name == "Tuesday"

    def test_upsert_rule_creates_with_defaults(self, rules_service, db):
        rule = rules_service.upsert_rule(MentorType.EXPERT, {"min_advance_booking_hours": 48})

        assert rule.min_advance_booking_hours == 48
        assert rule.max_advance_booking_days == 30
        assert rules_service.evaluator.get_rule_for_mentor_type(MentorType.EXPERT) is not None

    def test_upsert_rule_updates_given_fields_only(self, rules_service, make_rule, db):
        make_rule(MentorType.COACH, max_advance_booking_days=14)
        rules_service.upsert_rule(MentorType.COACH, {"slot_creation_window_weeks": 6})

        rule = db.query(SchedulingRule).filter(SchedulingRule.mentor_type == "coach").one()
        assert rule.slot_creation_window_weeks == 6
        assert rule.max_advance_booking_days == 14

    def test_upsert_rule_can_clear_a_field(self, rules_service, make_rule, db):
        make_rule(MentorType.COACH, max_sessions_per_week=3)
        rules_service.upsert_rule(MentorType.COACH, {"max_sessions_per_week": None})

        rule = db.query(SchedulingRule).filter(SchedulingRule.mentor_type == "coach").one()
        assert rule.max_sessions_per_week is None
        assert rule.min_advance_booking_hours == 24
