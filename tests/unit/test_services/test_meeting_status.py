"""Unit tests for the meeting approval workflow."""
import pytest

from officeops.core.constants import MEETING_STATUS_APPROVED, MEETING_STATUS_DECLINED, MEETING_STATUS_PENDING
from officeops.core.exceptions import BookingConflictError, NotFoundError, ValidationError
from officeops.db.models import Meeting, MeetingStatus
from officeops.services.meeting_status import (
    change_status,
    current_status,
    current_statuses,
    record_status,
    status_history,
)
from tests.utils import at


@pytest.fixture
def meeting(db_session, room):
    meeting = Meeting(title="Review", room_id=room.id, user_id=42, start_time=at(10), end_time=at(11))
    db_session.add(meeting)
    db_session.commit()
    db_session.refresh(meeting)
    record_status(db_session, meeting.id, MEETING_STATUS_PENDING)
    return meeting


@pytest.mark.unit
class TestRecordStatus:
    """Appending status rows."""

    def test_approval_stamps_approver_only(self, db_session, meeting):
        row = record_status(db_session, meeting.id, MEETING_STATUS_APPROVED, actor_id=7, decline_reason="ignored")

        assert row.approved_by == 7
        assert row.declined_by is None
        assert row.decline_reason is None

    def test_decline_stamps_decliner_and_reason(self, db_session, meeting):
        row = record_status(db_session, meeting.id, MEETING_STATUS_DECLINED, actor_id=7, decline_reason="Room closed")

        assert row.declined_by == 7
        assert row.approved_by is None
        assert row.decline_reason == "Room closed"

    def test_pending_carries_no_actor(self, db_session, meeting):
        row = record_status(db_session, meeting.id, MEETING_STATUS_PENDING, actor_id=7)

        assert row.approved_by is None
        assert row.declined_by is None

    def test_unknown_status_is_rejected(self, db_session, meeting):
        with pytest.raises(ValidationError, match="Invalid status"):
            record_status(db_session, meeting.id, "archived", actor_id=7)

    def test_record_status_does_not_check_meeting_exists(self, db_session):
        row = record_status(db_session, 12345, MEETING_STATUS_APPROVED, actor_id=7)
        assert row.id is not None


@pytest.mark.unit
class TestStatusHistory:
    """History is append-only; the newest row is current."""

    def test_full_history_is_kept(self, db_session, meeting):
        record_status(db_session, meeting.id, MEETING_STATUS_APPROVED, actor_id=7)
        record_status(db_session, meeting.id, MEETING_STATUS_DECLINED, actor_id=8, decline_reason="Clash")

        history = status_history(db_session, meeting.id)

        assert [row.status for row in history] == [
            MEETING_STATUS_DECLINED,
            MEETING_STATUS_APPROVED,
            MEETING_STATUS_PENDING,
        ]
        assert current_status(db_session, meeting.id).status == MEETING_STATUS_DECLINED
        assert db_session.query(MeetingStatus).filter(MeetingStatus.meeting_id == meeting.id).count() == 3

    def test_same_status_twice_is_allowed(self, db_session, meeting):
        record_status(db_session, meeting.id, MEETING_STATUS_APPROVED, actor_id=7)
        record_status(db_session, meeting.id, MEETING_STATUS_APPROVED, actor_id=8)

        history = status_history(db_session, meeting.id)
        assert len(history) == 3
        assert history[0].approved_by == 8

    def test_current_status_without_history(self, db_session):
        assert current_status(db_session, 999) is None

    def test_current_statuses_batch(self, db_session, meeting, room):
        other = Meeting(title="Other", room_id=room.id, user_id=1, start_time=at(12), end_time=at(13))
        db_session.add(other)
        db_session.commit()
        record_status(db_session, other.id, MEETING_STATUS_PENDING)
        record_status(db_session, other.id, MEETING_STATUS_APPROVED, actor_id=7)

        statuses = current_statuses(db_session, [meeting.id, other.id, 999])

        assert statuses == {meeting.id: MEETING_STATUS_PENDING, other.id: MEETING_STATUS_APPROVED}

    def test_current_statuses_empty_input(self, db_session):
        assert current_statuses(db_session, []) == {}


@pytest.mark.unit
class TestChangeStatus:
    """The checked wrapper used by the API."""

    def test_change_status_returns_serialized_entry(self, db_session, meeting):
        entry = change_status(db_session, meeting.id, MEETING_STATUS_APPROVED, actor_id=7)

        assert entry["status"] == MEETING_STATUS_APPROVED
        assert entry["approved_by"] == 7
        assert entry["meeting_id"] == meeting.id
        assert entry["changed_at"].endswith("+00:00")

    def test_change_status_missing_meeting(self, db_session):
        with pytest.raises(NotFoundError, match="Meeting not found"):
            change_status(db_session, 999, MEETING_STATUS_APPROVED, actor_id=7)


@pytest.mark.unit
class TestReviveDeclinedMeeting:
    """A declined meeting gave up its room; taking it back re-checks the slot."""

    def _book(self, db_session, room, start, end):
        other = Meeting(title="Walk-in", room_id=room.id, user_id=5, start_time=start, end_time=end)
        db_session.add(other)
        db_session.commit()
        record_status(db_session, other.id, MEETING_STATUS_PENDING)
        return other

    def test_reapproval_clashes_with_booking_in_freed_slot(self, db_session, room, meeting):
        change_status(db_session, meeting.id, MEETING_STATUS_DECLINED, actor_id=7, decline_reason="Clash")
        other = self._book(db_session, room, at(10, 30), at(11, 30))
        change_status(db_session, other.id, MEETING_STATUS_APPROVED, actor_id=7)

        with pytest.raises(BookingConflictError) as exc_info:
            change_status(db_session, meeting.id, MEETING_STATUS_APPROVED, actor_id=7)

        assert [c["id"] for c in exc_info.value.conflicts] == [other.id]
        assert current_status(db_session, meeting.id).status == MEETING_STATUS_DECLINED

    def test_back_to_pending_is_also_checked(self, db_session, room, meeting):
        change_status(db_session, meeting.id, MEETING_STATUS_DECLINED, actor_id=7, decline_reason="Clash")
        self._book(db_session, room, at(10), at(11))

        with pytest.raises(BookingConflictError):
            change_status(db_session, meeting.id, MEETING_STATUS_PENDING, actor_id=7)

    def test_reapproval_when_slot_still_free(self, db_session, room, meeting):
        change_status(db_session, meeting.id, MEETING_STATUS_DECLINED, actor_id=7, decline_reason="Clash")
        self._book(db_session, room, at(11), at(12))

        entry = change_status(db_session, meeting.id, MEETING_STATUS_APPROVED, actor_id=7)

        assert entry["status"] == MEETING_STATUS_APPROVED

    def test_declining_again_never_conflicts(self, db_session, room, meeting):
        change_status(db_session, meeting.id, MEETING_STATUS_DECLINED, actor_id=7, decline_reason="Clash")
        self._book(db_session, room, at(10), at(11))

        entry = change_status(db_session, meeting.id, MEETING_STATUS_DECLINED, actor_id=8, decline_reason="Still no")

        assert entry["declined_by"] == 8
