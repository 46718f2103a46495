"""Unit tests for the helpdesk ticket registry."""
import pytest
from datetime import timedelta

from officeops.core.constants import TICKET_STATUS_CLOSED, TICKET_STATUS_OPEN, TICKET_STATUS_RESOLVED
from officeops.core.exceptions import NotFoundError, ValidationError
from officeops.core.utils import utcnow
from officeops.db.models import HelpdeskTicket, TicketAssignment
from officeops.services.ticket import (
    create_ticket,
    get_ticket,
    list_tickets,
    list_trashed,
    move_to_trash,
    purge_trashed,
    restore_from_trash,
    soft_delete_ticket,
    update_ticket,
)


@pytest.mark.unit
class TestCreateAndUpdateTicket:
    """Ticket lifecycle."""

    def test_create_ticket_defaults(self, db_session):
        ticket = create_ticket(db_session, reporter_id=42, title="Wi-Fi down")

        assert ticket["status"] == TICKET_STATUS_OPEN
        assert ticket["priority"] == "medium"
        assert ticket["user_id"] == 42
        assert ticket["assigned_to"] is None
        assert ticket["assignees"] == []
        assert ticket["resolve_time"] is None

    def test_create_ticket_with_assignees(self, db_session):
        ticket = create_ticket(db_session, reporter_id=42, title="Wi-Fi down", assignees="9,3")

        assert ticket["assigned_to"] == 9
        assert ticket["assignees"] == [9, 3]
        assert ticket["assigned_by"] == 42

    def test_invalid_priority_is_rejected(self, db_session):
        with pytest.raises(ValidationError, match="Invalid priority"):
            create_ticket(db_session, reporter_id=42, title="Oops", priority="critical")
        assert db_session.query(HelpdeskTicket).count() == 0

    def test_resolve_time_is_set_once(self, db_session):
        ticket = create_ticket(db_session, reporter_id=42, title="Leaking tap")

        resolved = update_ticket(db_session, ticket["id"], {"status": TICKET_STATUS_RESOLVED}, actor_id=1)
        assert resolved["resolve_time"] is not None

        closed = update_ticket(db_session, ticket["id"], {"status": TICKET_STATUS_CLOSED}, actor_id=1)
        reopened = update_ticket(db_session, ticket["id"], {"status": TICKET_STATUS_RESOLVED}, actor_id=1)
        assert closed["resolve_time"] == resolved["resolve_time"]
        assert reopened["resolve_time"] == resolved["resolve_time"]

    def test_update_without_assignees_keeps_them(self, db_session):
        ticket = create_ticket(db_session, reporter_id=42, title="Desk lamp", assignees=[4])

        updated = update_ticket(db_session, ticket["id"], {"priority": "high"}, actor_id=1)

        assert updated["priority"] == "high"
        assert updated["assignees"] == [4]

    def test_update_with_empty_assignees_unassigns(self, db_session):
        ticket = create_ticket(db_session, reporter_id=42, title="Desk lamp", assignees=[4])

        updated = update_ticket(db_session, ticket["id"], {}, actor_id=1, assignees=[])

        assert updated["assignees"] == []
        assert updated["assigned_to"] is None

    def test_update_missing_ticket(self, db_session):
        with pytest.raises(NotFoundError):
            update_ticket(db_session, 999, {"title": "x"}, actor_id=1)


@pytest.mark.unit
class TestTrashAndDelete:
    """Trash, restore, soft delete and purge."""

    def test_trash_hides_from_default_listing(self, db_session):
        kept = create_ticket(db_session, reporter_id=42, title="Keep")
        trashed = create_ticket(db_session, reporter_id=42, title="Trash me")

        move_to_trash(db_session, trashed["id"])

        assert [t["id"] for t in list_tickets(db_session)] == [kept["id"]]
        assert {t["id"] for t in list_tickets(db_session, include_trashed=True)} == {kept["id"], trashed["id"]}
        assert [t["id"] for t in list_trashed(db_session)] == [trashed["id"]]

    def test_restore_from_trash(self, db_session):
        ticket = create_ticket(db_session, reporter_id=42, title="Oops")
        move_to_trash(db_session, ticket["id"])

        restored = restore_from_trash(db_session, ticket["id"])

        assert restored["trashed_at"] is None
        assert list_trashed(db_session) == []

    def test_soft_deleted_ticket_disappears_everywhere(self, db_session):
        ticket = create_ticket(db_session, reporter_id=42, title="Gone")
        move_to_trash(db_session, ticket["id"])

        assert soft_delete_ticket(db_session, ticket["id"]) is True

        assert get_ticket(db_session, ticket["id"]) is None
        assert list_tickets(db_session, include_trashed=True) == []
        assert list_trashed(db_session) == []
        assert soft_delete_ticket(db_session, ticket["id"]) is False
        # The row itself is kept
        assert db_session.query(HelpdeskTicket).count() == 1

    def test_list_filters(self, db_session):
        mine = create_ticket(db_session, reporter_id=42, title="Mine", assignees=[9])
        create_ticket(db_session, reporter_id=43, title="Theirs", assignees=[3])

        assert [t["id"] for t in list_tickets(db_session, assigned_to=9)] == [mine["id"]]
        assert [t["id"] for t in list_tickets(db_session, user_id=42)] == [mine["id"]]
        assert list_tickets(db_session, status=TICKET_STATUS_CLOSED) == []

    def test_purge_removes_only_old_trash(self, db_session):
        old = create_ticket(db_session, reporter_id=42, title="Old", assignees=[9])
        recent = create_ticket(db_session, reporter_id=42, title="Recent")
        live = create_ticket(db_session, reporter_id=42, title="Live")
        move_to_trash(db_session, old["id"])
        move_to_trash(db_session, recent["id"])

        row = db_session.get(HelpdeskTicket, old["id"])
        row.trashed_at = utcnow() - timedelta(days=40)
        db_session.commit()

        assert purge_trashed(db_session, older_than_days=30) == 1

        remaining = {t.id for t in db_session.query(HelpdeskTicket).all()}
        assert remaining == {recent["id"], live["id"]}
        assert db_session.query(TicketAssignment).count() == 0

    def test_purge_with_nothing_to_do(self, db_session):
        assert purge_trashed(db_session, older_than_days=30) == 0

    def test_trash_missing_ticket(self, db_session):
        with pytest.raises(NotFoundError):
            move_to_trash(db_session, 999)
