"""Unit tests for meeting attendee sets."""
import pytest

from officeops.db.models import Meeting, MeetingAttendee
from officeops.services.attendee import (
    add_attendee,
    attendees_for_meetings,
    list_attendees,
    remove_attendee,
    replace_attendees,
)
from tests.utils import at


@pytest.fixture
def meeting(db_session, room):
    meeting = Meeting(title="Sync", room_id=room.id, user_id=42, start_time=at(10), end_time=at(11))
    db_session.add(meeting)
    db_session.commit()
    db_session.refresh(meeting)
    return meeting


def _rows(db_session, meeting_id):
    return db_session.query(MeetingAttendee).filter(MeetingAttendee.meeting_id == meeting_id).count()


@pytest.mark.unit
class TestAttendees:
    """Idempotent attendee management."""

    def test_add_attendee_twice_keeps_one_row(self, db_session, meeting):
        first = add_attendee(db_session, meeting.id, 5)
        created_at = first.created_at

        second = add_attendee(db_session, meeting.id, 5)

        assert _rows(db_session, meeting.id) == 1
        assert second.created_at == created_at
        assert second.updated_at >= created_at

    def test_replace_collapses_duplicates(self, db_session, meeting):
        result = replace_attendees(db_session, meeting.id, [5, 7, 5])

        assert result == [5, 7]
        assert _rows(db_session, meeting.id) == 2
        assert list_attendees(db_session, meeting.id) == [5, 7]

    def test_one_replace_lists_by_user_id(self, db_session, meeting):
        result = replace_attendees(db_session, meeting.id, [9, 3])

        assert result == [9, 3]
        assert list_attendees(db_session, meeting.id) == [3, 9]

    def test_replace_swaps_the_whole_set(self, db_session, meeting):
        replace_attendees(db_session, meeting.id, [1, 2, 3])
        replace_attendees(db_session, meeting.id, [3, 4])

        assert sorted(list_attendees(db_session, meeting.id)) == [3, 4]

    def test_replace_with_empty_list_clears(self, db_session, meeting):
        replace_attendees(db_session, meeting.id, [1, 2])
        replace_attendees(db_session, meeting.id, [])

        assert list_attendees(db_session, meeting.id) == []

    def test_remove_attendee(self, db_session, meeting):
        replace_attendees(db_session, meeting.id, [5, 7])

        assert remove_attendee(db_session, meeting.id, 5) is True
        assert remove_attendee(db_session, meeting.id, 5) is False
        assert list_attendees(db_session, meeting.id) == [7]

    def test_attendees_for_meetings(self, db_session, meeting, room):
        other = Meeting(title="Other", room_id=room.id, user_id=1, start_time=at(12), end_time=at(13))
        db_session.add(other)
        db_session.commit()
        replace_attendees(db_session, meeting.id, [5, 7])

        result = attendees_for_meetings(db_session, [meeting.id, other.id])

        assert result == {meeting.id: [5, 7], other.id: []}
