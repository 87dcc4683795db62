import pytest

from mentor_scheduling.models import MentorType, WaitlistStatus
from mentor_scheduling.schemas import WaitlistCreate
from mentor_scheduling.services import WaitlistService
from mentor_scheduling.exceptions import DuplicateRequestError, InvalidStatusTransitionError, NotFoundError


@pytest.fixture
def waitlist_service(db):
    return WaitlistService(db)


class TestJoinWaitlist:

    def test_join_creates_pending_entry(self, waitlist_service, make_startup, make_mentor):
        startup = make_startup()
        mentor = make_mentor(MentorType.EXPERT)

        entry = waitlist_service.join_waitlist(startup.id, WaitlistCreate(mentor_id=mentor.id, priority=2, notes="Series A prep"))

        assert entry.status == "pending"
        assert entry.priority == 2
        assert entry.notes == "Series A prep"
        assert entry.contacted_at is None

    def test_duplicate_entry_is_rejected(self, waitlist_service, make_startup, make_mentor):
        startup = make_startup()
        mentor = make_mentor(MentorType.EXPERT)
        waitlist_service.join_waitlist(startup.id, WaitlistCreate(mentor_id=mentor.id))

        with pytest.raises(DuplicateRequestError):
            waitlist_service.join_waitlist(startup.id, WaitlistCreate(mentor_id=mentor.id))

    def test_unknown_mentor(self, waitlist_service, make_startup):
        with pytest.raises(NotFoundError, match="Mentor"):
            waitlist_service.join_waitlist(make_startup().id, WaitlistCreate(mentor_id="missing"))

    def test_unknown_startup(self, waitlist_service, make_mentor):
        mentor = make_mentor()
        with pytest.raises(NotFoundError, match="Startup"):
            waitlist_service.join_waitlist("missing", WaitlistCreate(mentor_id=mentor.id))


class TestListEntries:

    def test_mentor_entries_by_priority(self, waitlist_service, make_startup, make_mentor):
        mentor = make_mentor(MentorType.EXPERT)
        low = waitlist_service.join_waitlist(make_startup("Low").id, WaitlistCreate(mentor_id=mentor.id, priority=0))
        high = waitlist_service.join_waitlist(make_startup("High").id, WaitlistCreate(mentor_id=mentor.id, priority=5))
        mid = waitlist_service.join_waitlist(make_startup("Mid").id, WaitlistCreate(mentor_id=mentor.id, priority=3))

        entries = waitlist_service.get_entries_for_mentor(mentor.id)
        assert [e.id for e in entries] == [high.id, mid.id, low.id]

    def test_startup_entries(self, waitlist_service, make_startup, make_mentor):
        startup = make_startup()
        waitlist_service.join_waitlist(startup.id, WaitlistCreate(mentor_id=make_mentor().id))
        waitlist_service.join_waitlist(startup.id, WaitlistCreate(mentor_id=make_mentor().id))
        waitlist_service.join_waitlist(make_startup("Other").id, WaitlistCreate(mentor_id=make_mentor().id))

        assert len(waitlist_service.get_entries_for_startup(startup.id)) == 2


class TestUpdateStatus:

    @pytest.fixture
    def entry(self, waitlist_service, make_startup, make_mentor):
        return waitlist_service.join_waitlist(make_startup().id, WaitlistCreate(mentor_id=make_mentor().id))

    def test_contacted_records_timestamp(self, waitlist_service, entry):
        updated = waitlist_service.update_status(entry.id, WaitlistStatus.CONTACTED)
        assert updated.status == "contacted"
        assert updated.contacted_at is not None

    def test_pending_to_scheduled(self, waitlist_service, entry):
        assert waitlist_service.update_status(entry.id, WaitlistStatus.SCHEDULED).status == "scheduled"

    def test_scheduled_is_final(self, waitlist_service, entry):
        waitlist_service.update_status(entry.id, WaitlistStatus.SCHEDULED)
        with pytest.raises(InvalidStatusTransitionError):
            waitlist_service.update_status(entry.id, WaitlistStatus.CONTACTED)

    def test_cannot_go_back_to_pending(self, waitlist_service, entry):
        waitlist_service.update_status(entry.id, WaitlistStatus.CONTACTED)
        with pytest.raises(InvalidStatusTransitionError):
            waitlist_service.update_status(entry.id, WaitlistStatus.PENDING)

    def test_unknown_entry(self, waitlist_service):
        with pytest.raises(NotFoundError):
            waitlist_service.update_status("missing", WaitlistStatus.CONTACTED)
