from datetime import datetime, timedelta

from sqlalchemy.orm import Session, joinedload

from studio_api.models.application import Application
from studio_api.models.contact import ContactLead
from studio_api.models.job import JobPosting
from studio_api.services.records import RECENT_LIMIT, count_by, month_buckets
from studio_api.utils.clock import to_iso, utcnow

TREND_MONTHS = 6


def _month_start(moment: datetime, months_back: int = 0) -> datetime:
    start = moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    for _ in range(months_back):
        start = (start - timedelta(days=1)).replace(day=1)
    return start


def _growth(current: int, previous: int) -> float:
    if previous > 0:
        return round((current - previous) / previous * 100, 1)
    return 100.0 if current > 0 else 0.0


def dashboard(db: Session, now: datetime | None = None) -> dict:
    now = now or utcnow()
    this_month = to_iso(_month_start(now))
    last_month = to_iso(_month_start(now, 1))
    trend_start = to_iso(_month_start(now, TREND_MONTHS - 1))

    def created_between(model, start: str, end: str | None = None) -> int:
        query = db.query(model).filter(model.created_at >= start)
        if end:
            query = query.filter(model.created_at < end)
        return query.count()

    applications_this_month = created_between(Application, this_month)
    applications_last_month = created_between(Application, last_month, this_month)
    contacts_this_month = created_between(ContactLead, this_month)
    contacts_last_month = created_between(ContactLead, last_month, this_month)

    overview = {
        "total_jobs": db.query(JobPosting).count(),
        "active_jobs": db.query(JobPosting).filter(JobPosting.status == "active").count(),
        "total_applications": db.query(Application).count(),
        "pending_applications": db.query(Application).filter(Application.status == "pending").count(),
        "total_contacts": db.query(ContactLead).count(),
        "new_contacts": db.query(ContactLead).filter(ContactLead.status == "new").count(),
        "jobs_this_month": created_between(JobPosting, this_month),
        "applications_this_month": applications_this_month,
        "contacts_this_month": contacts_this_month,
        "application_growth": _growth(applications_this_month, applications_last_month),
        "contact_growth": _growth(contacts_this_month, contacts_last_month),
    }

    recent_applications = (
        db.query(Application)
        .options(joinedload(Application.job))
        .order_by(Application.created_at.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    recent_contacts = (
        db.query(ContactLead).order_by(ContactLead.created_at.desc()).limit(RECENT_LIMIT).all()
    )

    return {
        "overview": overview,
        "recent_activities": {
            "applications": recent_applications,
            "contacts": recent_contacts,
        },
        "statistics": {
            "application_status_stats": count_by(db.query(Application), Application.status),
            "contact_status_stats": count_by(db.query(ContactLead), ContactLead.status),
            "monthly_application_trends": month_buckets(
                db.query(Application), Application.created_at, since=trend_start
            ),
            "monthly_contact_trends": month_buckets(
                db.query(ContactLead), ContactLead.created_at, since=trend_start
            ),
        },
    }
