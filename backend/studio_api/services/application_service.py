import logging

from fastapi import BackgroundTasks
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from studio_api.errors import DuplicateSubmission, FieldError, NotFound, ValidationFailed
from studio_api.models.application import Application
from studio_api.models.job import JobPosting
from studio_api.services.notifications import Notifier
from studio_api.services.records import RECENT_LIMIT, apply_filter, count_by, fetch
from studio_api.services.workflow import transition_application
from studio_api.utils.clock import new_id, now_iso
from studio_api.validation import (
    ensure_valid,
    validate_application,
    validate_application_update,
)

logger = logging.getLogger(__name__)

LIST_LIMIT = 100
NOT_ACCEPTING = "This job is no longer accepting applications"
ALREADY_APPLIED = "You have already applied for this position"


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _accepting(job: JobPosting, now: str) -> bool:
    if job.status != "active":
        return False
    return not job.application_deadline or job.application_deadline >= now


def submit_application(
    db: Session,
    data: dict,
    notifier: Notifier,
    tasks: BackgroundTasks,
) -> Application:
    ensure_valid(validate_application(data))

    job = db.get(JobPosting, data["job_id"])
    if job is None:
        raise NotFound("Job not found")
    now = now_iso()
    if not _accepting(job, now):
        raise ValidationFailed([FieldError("jobId", NOT_ACCEPTING)], NOT_ACCEPTING)

    email = data["email"].strip().lower()
    existing = (
        db.query(Application)
        .filter(Application.job_id == job.id, Application.email == email)
        .first()
    )
    if existing:
        raise DuplicateSubmission(ALREADY_APPLIED)

    application = Application(
        id=new_id(),
        job_id=job.id,
        name=data["name"].strip(),
        email=email,
        phone=_optional(data.get("phone")),
        resume=data["resume"].strip(),
        portfolio=_optional(data.get("portfolio")),
        experience=_optional(data.get("experience")),
        cover_letter=data["cover_letter"].strip(),
        status="pending",
        created_at=now,
        updated_at=now,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with an identical submission.
        db.rollback()
        raise DuplicateSubmission(ALREADY_APPLIED)
    db.refresh(application)
    logger.info("Application %s received for job %s", application.id, job.id)

    notifier.dispatch(tasks, notifier.application_received(application, job))
    return application


def get_application(db: Session, application_id: str) -> Application:
    return fetch(db, Application, application_id, "Application")


def list_applications(
    db: Session,
    job_id: str | None = None,
    status: str | None = None,
    limit: int = LIST_LIMIT,
) -> tuple[list[Application], int]:
    query = db.query(Application).options(joinedload(Application.job))
    query = apply_filter(query, Application.job_id, job_id)
    query = apply_filter(query, Application.status, status)
    total = query.count()
    applications = query.order_by(Application.created_at.desc()).limit(limit).all()
    return applications, total


def update_application(
    db: Session,
    application_id: str,
    data: dict,
    reviewer: str,
    notifier: Notifier,
    tasks: BackgroundTasks,
) -> Application:
    ensure_valid(validate_application_update(data))
    application = get_application(db, application_id)

    trigger = transition_application(
        application,
        reviewer,
        status=data.get("status"),
        notes=data.get("notes"),
        notes_set="notes" in data,
    )
    db.commit()
    db.refresh(application)

    if trigger:
        notifier.dispatch(tasks, notifier.application_status_changed(application, application.job, trigger))
    return application


def delete_application(db: Session, application_id: str):
    application = get_application(db, application_id)
    db.delete(application)
    db.commit()


def application_stats(db: Session) -> dict:
    recent = (
        db.query(Application)
        .options(joinedload(Application.job))
        .order_by(Application.created_at.desc())
        .limit(RECENT_LIMIT)
        .all()
    )
    per_job = count_by(
        db.query(Application).join(JobPosting, Application.job_id == JobPosting.id),
        JobPosting.title,
        limit=10,
    )
    return {
        "status_stats": count_by(db.query(Application), Application.status),
        "job_application_stats": per_job,
        "recent_applications": recent,
        "total": db.query(Application).count(),
    }
