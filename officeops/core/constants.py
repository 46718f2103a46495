"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Meeting Workflow
# A meeting is seeded as pending; approvals and declines append new history rows
MEETING_STATUS_PENDING = "pending"
MEETING_STATUS_APPROVED = "approved"
MEETING_STATUS_DECLINED = "declined"
MEETING_STATUSES = (
    MEETING_STATUS_PENDING,
    MEETING_STATUS_APPROVED,
    MEETING_STATUS_DECLINED,
)

# SOP Versioning
# Versions are "major.minor" strings; automatic bumps advance the major part
DEFAULT_SOP_VERSION = "1.0"
SOP_VISIBILITIES = ("public", "wing", "subwing", "private")
DEFAULT_SOP_VISIBILITY = "public"

# Helpdesk Tickets
TICKET_STATUS_OPEN = "open"
TICKET_STATUS_IN_PROGRESS = "in_progress"
TICKET_STATUS_RESOLVED = "resolved"
TICKET_STATUS_CLOSED = "closed"
TICKET_STATUSES = (
    TICKET_STATUS_OPEN,
    TICKET_STATUS_IN_PROGRESS,
    TICKET_STATUS_RESOLVED,
    TICKET_STATUS_CLOSED,
)
TICKET_PRIORITIES = ("low", "medium", "high", "urgent")
DEFAULT_TICKET_PRIORITY = "medium"

# JWT Token Configuration
# Roles are numeric as issued by the identity provider (0 = superadmin, 1 = admin, 2 = staff)
DEFAULT_APPROVER_ROLES = [0, 1]
