from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from studio_api.database import get_db
from studio_api.dependencies import get_current_admin
from studio_api.models.admin import AdminAccount
from studio_api.schemas.job import (
    JobCreate,
    JobDeleteResponse,
    JobListResponse,
    JobMutationResponse,
    JobResponse,
    JobStatsResponse,
    JobUpdate,
)
from studio_api.services import job_service

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _list_response(jobs, total) -> JobListResponse:
    return JobListResponse(jobs=[JobResponse.model_validate(j) for j in jobs], total=total)


@router.get("", response_model=JobListResponse)
async def list_public_jobs(
    department: str | None = None,
    location: str | None = None,
    type: str | None = None,
    status: str = "active",
    limit: int = Query(job_service.LIST_LIMIT, ge=1, le=job_service.LIST_LIMIT),
    db: Session = Depends(get_db),
):
    jobs, total = job_service.list_jobs(db, department, location, type, status, limit)
    return _list_response(jobs, total)


@router.get("/admin/all", response_model=JobListResponse)
async def list_all_jobs(
    department: str | None = None,
    location: str | None = None,
    type: str | None = None,
    status: str = "all",
    limit: int = Query(job_service.LIST_LIMIT, ge=1, le=job_service.LIST_LIMIT),
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    jobs, total = job_service.list_jobs(db, department, location, type, status, limit)
    return _list_response(jobs, total)


@router.get("/admin/stats", response_model=JobStatsResponse)
@router.get("/stats", response_model=JobStatsResponse)
async def get_job_stats(
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return JobStatsResponse.model_validate(job_service.job_stats(db))


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, db: Session = Depends(get_db)):
    return JobResponse.model_validate(job_service.get_job(db, job_id))


@router.post("", response_model=JobMutationResponse, status_code=201)
async def create_job(
    req: JobCreate,
    admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    job = job_service.create_job(db, req.model_dump(exclude_none=True), created_by=admin.username)
    return JobMutationResponse(message="Job created successfully", job=JobResponse.model_validate(job))


@router.put("/{job_id}", response_model=JobMutationResponse)
async def update_job(
    job_id: str,
    req: JobUpdate,
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    job = job_service.update_job(db, job_id, req.model_dump(exclude_unset=True))
    return JobMutationResponse(message="Job updated successfully", job=JobResponse.model_validate(job))


@router.delete("/admin/{job_id}", response_model=JobDeleteResponse)
@router.delete("/{job_id}", response_model=JobDeleteResponse)
async def delete_job(
    job_id: str,
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    removed = job_service.delete_job(db, job_id)
    return JobDeleteResponse(
        message="Job and related applications deleted successfully",
        deleted_applications=removed,
    )
