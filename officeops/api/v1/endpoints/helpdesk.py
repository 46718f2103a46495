"""Helpdesk ticket endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from officeops.api.deps import get_db, get_current_user, verify_approver
from officeops.schemas import (
    TicketCreate,
    TicketUpdate,
    TicketAssignmentsUpdate,
    TicketDetail,
    PurgeResult,
    SuccessResponse,
)
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
from officeops.services.ticket_assignment import set_assignments
from officeops.core.config import settings
from officeops.core.rate_limit import limiter, RATE_LIMITS

router = APIRouter()


@router.get("/tickets", response_model=List[TicketDetail])
async def list_tickets_endpoint(
    status: Optional[str] = None,
    assigned_to: Optional[int] = None,
    user_id: Optional[int] = None,
    include_trashed: bool = False,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """
    List tickets, newest first.

    ``assigned_to`` filters on the primary assignee. Trashed tickets are only
    included with ``include_trashed=true``; deleted tickets never are.
    """
    return list_tickets(
        db,
        include_trashed=include_trashed,
        assigned_to=assigned_to,
        status=status,
        user_id=user_id,
    )


@router.post("/tickets", response_model=TicketDetail, status_code=201)
@limiter.limit(RATE_LIMITS["write"])
async def create_ticket_endpoint(
    request: Request,
    payload: TicketCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Open a ticket. ``assigned_to`` may be an id, "9,3" or [9, 3]."""
    return create_ticket(
        db,
        reporter_id=user["id"],
        title=payload.title,
        details=payload.details,
        priority=payload.priority,
        status=payload.status,
        assignees=payload.assigned_to,
    )


@router.get("/tickets/{ticket_id}", response_model=TicketDetail)
async def get_ticket_endpoint(
    ticket_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    ticket = get_ticket(db, ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return ticket


@router.put("/tickets/{ticket_id}", response_model=TicketDetail)
@limiter.limit(RATE_LIMITS["write"])
async def update_ticket_endpoint(
    request: Request,
    ticket_id: int,
    payload: TicketUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Edit a ticket. Omitting ``assigned_to`` keeps the current assignees."""
    changes = payload.model_dump(exclude_unset=True, exclude={"assigned_to"})
    return update_ticket(db, ticket_id, changes, actor_id=user["id"], assignees=payload.assigned_to)


@router.delete("/tickets/{ticket_id}", response_model=SuccessResponse)
async def delete_ticket_endpoint(
    ticket_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Soft delete a ticket. It disappears from every listing, including trash."""
    if not soft_delete_ticket(db, ticket_id):
        raise HTTPException(status_code=404, detail="Ticket not found")
    return {"success": True}


@router.put("/tickets/{ticket_id}/assignments", response_model=TicketDetail)
@limiter.limit(RATE_LIMITS["write"])
async def set_assignments_endpoint(
    request: Request,
    ticket_id: int,
    payload: TicketAssignmentsUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Replace the assignee set. The first id becomes the primary assignee; [] unassigns."""
    set_assignments(db, ticket_id, payload.assigned_to, assigned_by=user["id"])
    return get_ticket(db, ticket_id)


@router.get("/trash", response_model=List[TicketDetail])
async def list_trash_endpoint(
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    return list_trashed(db)


@router.post("/tickets/{ticket_id}/trash", response_model=TicketDetail)
async def trash_ticket_endpoint(
    ticket_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    return move_to_trash(db, ticket_id)


@router.post("/tickets/{ticket_id}/restore", response_model=TicketDetail)
async def restore_ticket_endpoint(
    ticket_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    return restore_from_trash(db, ticket_id)


@router.post("/purge-trashed", response_model=PurgeResult, dependencies=[Depends(verify_approver)])
@limiter.limit(RATE_LIMITS["admin"])
async def purge_trashed_endpoint(
    request: Request,
    older_than_days: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
):
    """Permanently remove tickets trashed more than ``older_than_days`` ago (approvers only)."""
    days = settings.TRASH_RETENTION_DAYS if older_than_days is None else older_than_days
    return {"purged": purge_trashed(db, days), "older_than_days": days}
