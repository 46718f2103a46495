"""Helpdesk ticket registry: CRUD, trash, restore and purge."""
from datetime import timedelta
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from officeops.core.constants import (
    DEFAULT_TICKET_PRIORITY,
    TICKET_PRIORITIES,
    TICKET_STATUSES,
    TICKET_STATUS_OPEN,
    TICKET_STATUS_RESOLVED,
)
from officeops.core.exceptions import NotFoundError, PersistenceError, PortalError, ValidationError
from officeops.core.logging_config import get_logger
from officeops.core.utils import isoformat_utc, utcnow
from officeops.db.models import HelpdeskTicket, TicketAssignment
from officeops.services.ticket_assignment import get_assignments_for_tickets, set_assignments

logger = get_logger(__name__)

TICKET_FIELDS = ("title", "details", "status", "priority")


def _check_choices(status: Optional[str], priority: Optional[str]) -> None:
    if status is not None and status not in TICKET_STATUSES:
        raise ValidationError(
            f"Invalid status '{status}'",
            details={"status": f"must be one of: {', '.join(TICKET_STATUSES)}"},
        )
    if priority is not None and priority not in TICKET_PRIORITIES:
        raise ValidationError(
            f"Invalid priority '{priority}'",
            details={"priority": f"must be one of: {', '.join(TICKET_PRIORITIES)}"},
        )


def _get_live_ticket(db: Session, ticket_id: int) -> HelpdeskTicket:
    """A ticket that has not been soft deleted (trashed tickets are fine)."""
    ticket = db.get(HelpdeskTicket, ticket_id)
    if not ticket or ticket.deleted_at is not None:
        raise NotFoundError("Ticket", ticket_id)
    return ticket


def create_ticket(
    db: Session,
    reporter_id: int,
    title: str,
    details: Optional[str] = None,
    priority: str = DEFAULT_TICKET_PRIORITY,
    status: str = TICKET_STATUS_OPEN,
    assignees: Any = None,
) -> Dict:
    """Open a ticket, optionally assigning it in the same transaction."""
    _check_choices(status, priority)

    now = utcnow()
    ticket = HelpdeskTicket(
        title=title,
        details=details,
        user_id=reporter_id,
        status=status,
        priority=priority,
        request_time=now,
        last_update_time=now,
        resolve_time=now if status == TICKET_STATUS_RESOLVED else None,
        created_at=now,
        updated_at=now,
    )

    try:
        db.add(ticket)
        db.flush()
        if assignees is not None:
            set_assignments(db, ticket.id, assignees, assigned_by=reporter_id, commit=False)
        db.commit()
    except PortalError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("ticket_create_failed", error=str(exc))
        raise PersistenceError("Failed to create ticket") from exc

    logger.info("ticket_created", ticket_id=ticket.id, user_id=reporter_id, priority=priority)
    return get_ticket(db, ticket.id)


def update_ticket(
    db: Session,
    ticket_id: int,
    changes: Dict[str, Any],
    actor_id: int,
    assignees: Any = None,
) -> Dict:
    """
    Edit a ticket.

    ``resolve_time`` is stamped the first time the ticket moves to
    ``resolved`` and kept from then on. ``assignees=None`` leaves the
    assignment set alone; an empty list unassigns everyone.
    """
    ticket = _get_live_ticket(db, ticket_id)
    _check_choices(changes.get("status"), changes.get("priority"))

    now = utcnow()
    try:
        for field, value in changes.items():
            if field in TICKET_FIELDS:
                setattr(ticket, field, value)

        if ticket.status == TICKET_STATUS_RESOLVED and ticket.resolve_time is None:
            ticket.resolve_time = now
        ticket.last_update_time = now
        ticket.updated_at = now

        if assignees is not None:
            set_assignments(db, ticket_id, assignees, assigned_by=actor_id, commit=False)

        db.commit()
    except PortalError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("ticket_update_failed", ticket_id=ticket_id, error=str(exc))
        raise PersistenceError("Failed to update ticket") from exc

    logger.info("ticket_updated", ticket_id=ticket_id, fields=sorted(changes), actor_id=actor_id)
    return get_ticket(db, ticket_id)


def get_ticket(db: Session, ticket_id: int) -> Optional[Dict]:
    """A ticket with its assignees, or None if missing or deleted."""
    ticket = db.get(HelpdeskTicket, ticket_id)
    if not ticket or ticket.deleted_at is not None:
        return None
    assignees = get_assignments_for_tickets(db, [ticket.id])
    return serialize_ticket(ticket, assignees[ticket.id])


def _serialize_all(db: Session, tickets: List[HelpdeskTicket]) -> List[Dict]:
    assignees = get_assignments_for_tickets(db, [t.id for t in tickets])
    return [serialize_ticket(t, assignees[t.id]) for t in tickets]


def list_tickets(
    db: Session,
    include_trashed: bool = False,
    assigned_to: Optional[int] = None,
    status: Optional[str] = None,
    user_id: Optional[int] = None,
) -> List[Dict]:
    """Tickets newest first. Deleted tickets are never listed."""
    query = db.query(HelpdeskTicket).filter(HelpdeskTicket.deleted_at.is_(None))
    if not include_trashed:
        query = query.filter(HelpdeskTicket.trashed_at.is_(None))
    if assigned_to is not None:
        query = query.filter(HelpdeskTicket.assigned_to == assigned_to)
    if status is not None:
        query = query.filter(HelpdeskTicket.status == status)
    if user_id is not None:
        query = query.filter(HelpdeskTicket.user_id == user_id)

    tickets = query.order_by(HelpdeskTicket.request_time.desc(), HelpdeskTicket.id.desc()).all()
    return _serialize_all(db, tickets)


def list_trashed(db: Session) -> List[Dict]:
    tickets = (
        db.query(HelpdeskTicket)
        .filter(HelpdeskTicket.deleted_at.is_(None), HelpdeskTicket.trashed_at.isnot(None))
        .order_by(HelpdeskTicket.trashed_at.desc(), HelpdeskTicket.id.desc())
        .all()
    )
    return _serialize_all(db, tickets)


def move_to_trash(db: Session, ticket_id: int) -> Dict:
    ticket = _get_live_ticket(db, ticket_id)
    if ticket.trashed_at is None:
        ticket.trashed_at = utcnow()
        db.commit()
        logger.info("ticket_trashed", ticket_id=ticket_id)
    return get_ticket(db, ticket_id)


def restore_from_trash(db: Session, ticket_id: int) -> Dict:
    ticket = _get_live_ticket(db, ticket_id)
    if ticket.trashed_at is not None:
        ticket.trashed_at = None
        db.commit()
        logger.info("ticket_restored", ticket_id=ticket_id)
    return get_ticket(db, ticket_id)


def soft_delete_ticket(db: Session, ticket_id: int) -> bool:
    """Mark a ticket deleted. It disappears from every read but stays in the table."""
    ticket = db.get(HelpdeskTicket, ticket_id)
    if not ticket or ticket.deleted_at is not None:
        return False

    ticket.deleted_at = utcnow()
    db.commit()
    logger.info("ticket_deleted", ticket_id=ticket_id)
    return True


def purge_trashed(db: Session, older_than_days: int) -> int:
    """
    Permanently remove tickets that have sat in the trash longer than
    ``older_than_days``, together with their assignments.

    Returns:
        Number of tickets removed
    """
    if older_than_days < 0:
        raise ValidationError("older_than_days cannot be negative")

    cutoff = utcnow() - timedelta(days=older_than_days)
    ids = [
        ticket_id for (ticket_id,) in db.query(HelpdeskTicket.id)
        .filter(HelpdeskTicket.trashed_at.isnot(None), HelpdeskTicket.trashed_at < cutoff)
        .all()
    ]
    if not ids:
        return 0

    try:
        db.query(TicketAssignment).filter(TicketAssignment.ticket_id.in_(ids)).delete(synchronize_session="fetch")
        db.query(HelpdeskTicket).filter(HelpdeskTicket.id.in_(ids)).delete(synchronize_session="fetch")
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("ticket_purge_failed", count=len(ids), error=str(exc))
        raise PersistenceError("Failed to purge trashed tickets") from exc

    logger.info("tickets_purged", count=len(ids), older_than_days=older_than_days)
    return len(ids)


def serialize_ticket(ticket: HelpdeskTicket, assignees: List[int]) -> Dict:
    return {
        "id": ticket.id,
        "title": ticket.title,
        "details": ticket.details,
        "user_id": ticket.user_id,
        "assigned_by": ticket.assigned_by,
        "assigned_to": ticket.assigned_to,
        "assignees": assignees,
        "status": ticket.status,
        "priority": ticket.priority,
        "request_time": isoformat_utc(ticket.request_time),
        "last_update_time": isoformat_utc(ticket.last_update_time),
        "resolve_time": isoformat_utc(ticket.resolve_time),
        "trashed_at": isoformat_utc(ticket.trashed_at),
        "deleted_at": isoformat_utc(ticket.deleted_at),
        "created_at": isoformat_utc(ticket.created_at),
        "updated_at": isoformat_utc(ticket.updated_at),
    }
