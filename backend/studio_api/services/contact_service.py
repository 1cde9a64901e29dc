import logging
from datetime import datetime, timedelta

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from studio_api.config import settings
from studio_api.errors import DuplicateSubmission
from studio_api.models.contact import ContactLead
from studio_api.services.notifications import Notifier
from studio_api.services.records import RECENT_LIMIT, apply_filter, count_by, fetch, month_buckets
from studio_api.services.workflow import transition_contact
from studio_api.utils.clock import new_id, parse_iso, to_iso, utcnow
from studio_api.validation import ensure_valid, validate_contact, validate_contact_update

logger = logging.getLogger(__name__)

LIST_LIMIT = 100
RECENTLY_SUBMITTED = (
    "You have already submitted a contact form in the last 24 hours. "
    "Please wait before submitting again."
)


def submit_contact(
    db: Session,
    data: dict,
    notifier: Notifier,
    tasks: BackgroundTasks,
    now: datetime | None = None,
) -> ContactLead:
    ensure_valid(validate_contact(data))
    now = now or utcnow()
    email = data["email"].strip().lower()

    window_start = to_iso(now - timedelta(hours=settings.contact_duplicate_window_hours))
    recent = (
        db.query(ContactLead)
        .filter(ContactLead.email == email, ContactLead.created_at >= window_start)
        .first()
    )
    if recent:
        raise DuplicateSubmission(RECENTLY_SUBMITTED)

    stamp = to_iso(now)
    website = (data.get("website") or "").strip() or None
    contact = ContactLead(
        id=new_id(),
        name=data["name"].strip(),
        organization=data["organization"].strip(),
        email=email,
        number=data["number"].strip(),
        website=website,
        services=[s.strip() for s in data["services"]],
        status="new",
        priority="medium",
        created_at=stamp,
        updated_at=stamp,
    )
    db.add(contact)
    db.commit()
    db.refresh(contact)
    logger.info("Contact lead %s received", contact.id)

    notifier.dispatch(tasks, notifier.contact_received(contact))
    return contact


def get_contact(db: Session, contact_id: str) -> ContactLead:
    return fetch(db, ContactLead, contact_id, "Contact")


def list_contacts(
    db: Session,
    status: str | None = None,
    priority: str | None = None,
    assigned_to: str | None = None,
    limit: int = LIST_LIMIT,
) -> tuple[list[ContactLead], int]:
    query = db.query(ContactLead)
    query = apply_filter(query, ContactLead.status, status)
    query = apply_filter(query, ContactLead.priority, priority)
    query = apply_filter(query, ContactLead.assigned_to, assigned_to)
    total = query.count()
    contacts = query.order_by(ContactLead.created_at.desc()).limit(limit).all()
    return contacts, total


def update_contact(db: Session, contact_id: str, data: dict) -> ContactLead:
    ensure_valid(validate_contact_update(data))
    contact = get_contact(db, contact_id)
    if "follow_up_date" in data:
        follow_up = data["follow_up_date"]
        data = {**data, "follow_up_date": to_iso(parse_iso(follow_up)) if follow_up else None}
    transition_contact(contact, data)
    db.commit()
    db.refresh(contact)
    return contact


def delete_contact(db: Session, contact_id: str):
    contact = get_contact(db, contact_id)
    db.delete(contact)
    db.commit()


def _service_stats(db: Session) -> list[dict]:
    counts: dict[str, int] = {}
    for (services,) in db.query(ContactLead.services).all():
        for service in services or []:
            counts[service] = counts.get(service, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:10]
    return [{"key": name, "count": n} for name, n in ranked]


def contact_stats(db: Session) -> dict:
    recent = db.query(ContactLead).order_by(ContactLead.created_at.desc()).limit(RECENT_LIMIT).all()
    return {
        "status_stats": count_by(db.query(ContactLead), ContactLead.status),
        "priority_stats": count_by(db.query(ContactLead), ContactLead.priority),
        "service_stats": _service_stats(db),
        "monthly_stats": month_buckets(db.query(ContactLead), ContactLead.created_at, limit=12),
        "recent_contacts": recent,
        "total": db.query(ContactLead).count(),
    }
