"""Helpdesk ticket assignment set management."""
from typing import Any, Dict, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from officeops.core.exceptions import NotFoundError, PersistenceError
from officeops.core.logging_config import get_logger
from officeops.core.sanitization import parse_id_list
from officeops.core.utils import utcnow
from officeops.db.models import HelpdeskTicket, TicketAssignment

logger = get_logger(__name__)


def _current_assignees(db: Session, ticket_id: int) -> List[int]:
    rows = (
        db.query(TicketAssignment.user_id)
        .filter(TicketAssignment.ticket_id == ticket_id)
        .order_by(TicketAssignment.id.asc())
        .all()
    )
    return [user_id for (user_id,) in rows]


def set_assignments(
    db: Session,
    ticket_id: int,
    user_ids: Any,
    assigned_by: int,
    commit: bool = True,
) -> List[int]:
    """
    Replace the full assignee set of a ticket.

    ``user_ids`` may be a single id, a comma-separated string or a list; it
    is sanitized with parse_id_list(). An empty set unassigns the ticket.
    When the set is unchanged the assignment rows are left untouched.

    The ticket's cached ``assigned_to`` is set to the first assignee (or
    null) and ``last_update_time`` advances in the same transaction.

    Args:
        db: Database session
        ticket_id: Ticket to assign
        user_ids: New assignee set, in priority order
        assigned_by: User making the assignment
        commit: Commit immediately, or only flush so the caller can commit

    Returns:
        The sanitized assignee ids
    """
    ids = parse_id_list(user_ids) or []

    ticket = db.get(HelpdeskTicket, ticket_id)
    if not ticket or ticket.deleted_at is not None:
        raise NotFoundError("Ticket", ticket_id)

    now = utcnow()
    try:
        changed = _current_assignees(db, ticket_id) != ids
        if changed:
            db.query(TicketAssignment).filter(TicketAssignment.ticket_id == ticket_id).delete(
                synchronize_session="fetch"
            )
            for user_id in ids:
                db.add(TicketAssignment(
                    ticket_id=ticket_id,
                    user_id=user_id,
                    assigned_by=assigned_by,
                    created_at=now,
                ))
            ticket.assigned_by = assigned_by

        ticket.assigned_to = ids[0] if ids else None
        ticket.last_update_time = now
        ticket.updated_at = now

        if commit:
            db.commit()
        else:
            db.flush()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("ticket_assignments_failed", ticket_id=ticket_id, error=str(exc))
        raise PersistenceError("Failed to update ticket assignments") from exc

    if changed:
        logger.info("ticket_assignments_replaced", ticket_id=ticket_id, assignees=ids, assigned_by=assigned_by)
    return ids


def get_assignments_for_tickets(db: Session, ticket_ids: List[int]) -> Dict[int, List[int]]:
    """
    Assignees of several tickets in one query.

    Every requested ticket id is a key; users are listed in the order they
    were assigned.
    """
    result: Dict[int, List[int]] = {ticket_id: [] for ticket_id in ticket_ids}
    if not ticket_ids:
        return result

    rows = (
        db.query(TicketAssignment.ticket_id, TicketAssignment.user_id)
        .filter(TicketAssignment.ticket_id.in_(set(ticket_ids)))
        .order_by(TicketAssignment.id.asc())
        .all()
    )
    for ticket_id, user_id in rows:
        result[ticket_id].append(user_id)
    return result
