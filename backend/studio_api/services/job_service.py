import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from studio_api.models.application import Application
from studio_api.models.job import JobPosting
from studio_api.services.records import apply_filter, count_by, fetch
from studio_api.utils.clock import new_id, now_iso, parse_iso, to_iso, utcnow
from studio_api.validation import ensure_valid, validate_job

logger = logging.getLogger(__name__)

LIST_LIMIT = 100


def _clean(data: dict) -> dict:
    cleaned = {}
    for key, value in data.items():
        if isinstance(value, str):
            value = value.strip()
        elif isinstance(value, list):
            value = [item.strip() for item in value]
        cleaned[key] = value
    deadline = cleaned.get("application_deadline")
    if deadline:
        if len(deadline) == 10:
            # A bare date stays open until the end of that day.
            deadline = f"{deadline}T23:59:59Z"
        cleaned["application_deadline"] = to_iso(parse_iso(deadline))
    return cleaned


def get_job(db: Session, job_id: str) -> JobPosting:
    return fetch(db, JobPosting, job_id, "Job")


def list_jobs(
    db: Session,
    department: str | None = None,
    location: str | None = None,
    job_type: str | None = None,
    status: str | None = None,
    limit: int = LIST_LIMIT,
) -> tuple[list[JobPosting], int]:
    query = db.query(JobPosting)
    query = apply_filter(query, JobPosting.department, department)
    query = apply_filter(query, JobPosting.location, location)
    query = apply_filter(query, JobPosting.type, job_type)
    query = apply_filter(query, JobPosting.status, status)
    total = query.count()
    jobs = query.order_by(JobPosting.created_at.desc()).limit(limit).all()
    return jobs, total


def create_job(db: Session, data: dict, created_by: str) -> JobPosting:
    ensure_valid(validate_job(data))
    data = _clean(data)
    now = now_iso()
    job = JobPosting(
        id=new_id(),
        title=data["title"],
        department=data["department"],
        location=data["location"],
        type=data.get("type") or "Full-time",
        experience=data["experience"],
        description=data["description"],
        requirements=data["requirements"],
        benefits=data["benefits"],
        salary_min=data.get("salary_min"),
        salary_max=data.get("salary_max"),
        salary_currency=data.get("salary_currency") or "USD",
        application_deadline=data.get("application_deadline"),
        status=data.get("status") or "active",
        created_by=created_by,
        created_at=now,
        updated_at=now,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Job %s created by %s", job.id, created_by)
    return job


def update_job(db: Session, job_id: str, data: dict) -> JobPosting:
    job = get_job(db, job_id)
    ensure_valid(validate_job(data, partial=True))
    merged_salary = {
        "salary_min": data.get("salary_min", job.salary_min),
        "salary_max": data.get("salary_max", job.salary_max),
    }
    ensure_valid(validate_job(merged_salary, partial=True))

    for key, value in _clean(data).items():
        if key == "salary_currency" and not value:
            value = "USD"
        setattr(job, key, value)
    job.updated_at = now_iso()
    db.commit()
    db.refresh(job)
    return job


def delete_job(db: Session, job_id: str) -> int:
    """Delete a posting and every application that references it, atomically."""
    job = get_job(db, job_id)
    removed = (
        db.query(Application)
        .filter(Application.job_id == job.id)
        .delete(synchronize_session=False)
    )
    db.delete(job)
    db.commit()
    logger.info("Job %s deleted with %d applications", job_id, removed)
    return removed


def job_stats(db: Session) -> dict:
    week_ago = to_iso(utcnow() - timedelta(days=7))
    active = db.query(JobPosting).filter(JobPosting.status == "active")
    return {
        "total_jobs": db.query(JobPosting).count(),
        "active_jobs": active.count(),
        "total_applications": db.query(Application).count(),
        "recent_applications": db.query(Application).filter(Application.created_at >= week_ago).count(),
        "status_stats": count_by(db.query(JobPosting), JobPosting.status),
        "department_stats": count_by(active, JobPosting.department),
        "location_stats": count_by(active, JobPosting.location),
    }
