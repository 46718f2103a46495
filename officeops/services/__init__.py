from .attendee import (
    add_attendee,
    attendees_for_meetings,
    list_attendees,
    remove_attendee,
    replace_attendees,
)
from .meeting import (
    create_meeting,
    delete_meeting,
    find_overlapping,
    get_meeting,
    list_meetings,
    update_meeting,
)
from .meeting_status import (
    change_status,
    current_status,
    current_statuses,
    record_status,
    status_history,
)
from .room import create_room, delete_room, get_room, list_rooms, update_room
from .sop import (
    create_document,
    delete_document,
    get_document,
    get_lineage_entry,
    latest_lineage_entry,
    list_documents,
    list_lineage,
    next_major_version,
    normalize_version,
    update_document,
    upload_file,
    upload_new_version,
    upload_same_file,
)
from .ticket import (
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
from .ticket_assignment import get_assignments_for_tickets, set_assignments

__all__ = [
    # attendees
    "add_attendee",
    "attendees_for_meetings",
    "list_attendees",
    "remove_attendee",
    "replace_attendees",
    # meetings
    "create_meeting",
    "delete_meeting",
    "find_overlapping",
    "get_meeting",
    "list_meetings",
    "update_meeting",
    # meeting workflow
    "change_status",
    "current_status",
    "current_statuses",
    "record_status",
    "status_history",
    # rooms
    "create_room",
    "delete_room",
    "get_room",
    "list_rooms",
    "update_room",
    # sops
    "create_document",
    "delete_document",
    "get_document",
    "get_lineage_entry",
    "latest_lineage_entry",
    "list_documents",
    "list_lineage",
    "next_major_version",
    "normalize_version",
    "update_document",
    "upload_file",
    "upload_new_version",
    "upload_same_file",
    # helpdesk
    "create_ticket",
    "get_assignments_for_tickets",
    "get_ticket",
    "list_tickets",
    "list_trashed",
    "move_to_trash",
    "purge_trashed",
    "restore_from_trash",
    "set_assignments",
    "soft_delete_ticket",
    "update_ticket",
]
