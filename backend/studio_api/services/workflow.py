"""Status lifecycles for applications and contact leads.

Any listed status is reachable from any other; the only guard is membership
in the named set. Applying a transition is kept free of I/O: callers persist
the record and hand the returned trigger to the notifier.
"""
from studio_api.models.application import Application
from studio_api.models.contact import ContactLead
from studio_api.utils.clock import now_iso

ADMIN_ROLES = ("admin", "super-admin")
JOB_TYPES = ("Full-time", "Part-time", "Contract", "Internship")
JOB_STATUSES = ("active", "inactive", "closed")
APPLICATION_STATUSES = ("pending", "reviewing", "shortlisted", "rejected", "hired")
CONTACT_STATUSES = ("new", "contacted", "in-progress", "completed", "closed")
CONTACT_PRIORITIES = ("low", "medium", "high", "urgent")

# Applicant is told about these outcomes, one message variant per status.
NOTIFYING_STATUSES = ("shortlisted", "rejected", "hired")


class InvalidTransition(ValueError):
    def __init__(self, field: str, value: str):
        super().__init__(f"Invalid {field}: {value!r}")
        self.field = field
        self.value = value


def transition_application(
    application: Application,
    reviewer: str,
    status: str | None = None,
    notes: str | None = None,
    notes_set: bool = False,
) -> str | None:
    """Apply an admin update to an application in place.

    Returns the status that should trigger an applicant notification, if any.
    """
    if status is not None and status not in APPLICATION_STATUSES:
        raise InvalidTransition("status", status)

    now = now_iso()
    if notes_set:
        application.notes = notes
    if status is not None:
        application.status = status
        application.reviewed_by = reviewer
        application.reviewed_at = now
    application.updated_at = now

    if status in NOTIFYING_STATUSES:
        return status
    return None


def transition_contact(contact: ContactLead, changes: dict) -> None:
    """Apply admin triage changes to a contact lead. Never notifies."""
    status = changes.get("status")
    priority = changes.get("priority")
    if status is not None and status not in CONTACT_STATUSES:
        raise InvalidTransition("status", status)
    if priority is not None and priority not in CONTACT_PRIORITIES:
        raise InvalidTransition("priority", priority)

    if status is not None:
        contact.status = status
    if priority is not None:
        contact.priority = priority
    for field in ("notes", "assigned_to", "follow_up_date"):
        if field in changes:
            setattr(contact, field, changes[field])
    contact.updated_at = now_iso()
