from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from studio_api.database import get_db
from studio_api.dependencies import get_current_admin, get_notifier
from studio_api.models.admin import AdminAccount
from studio_api.schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationMutationResponse,
    ApplicationResponse,
    ApplicationStatsResponse,
    ApplicationSubmitted,
    ApplicationUpdate,
)
from studio_api.services import application_service
from studio_api.services.notifications import Notifier

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("", response_model=ApplicationSubmitted, status_code=201)
async def submit_application(
    req: ApplicationCreate,
    tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    application = application_service.submit_application(db, req.model_dump(), notifier, tasks)
    return ApplicationSubmitted(application_id=application.id)


@router.get("/admin", response_model=ApplicationListResponse)
@router.get("", response_model=ApplicationListResponse)
async def list_applications(
    job_id: str | None = Query(None, alias="jobId"),
    status: str | None = None,
    limit: int = Query(application_service.LIST_LIMIT, ge=1, le=application_service.LIST_LIMIT),
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    applications, total = application_service.list_applications(db, job_id, status, limit)
    return ApplicationListResponse(
        applications=[ApplicationResponse.model_validate(a) for a in applications],
        total=total,
    )


@router.get("/stats", response_model=ApplicationStatsResponse)
async def get_application_stats(
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return ApplicationStatsResponse.model_validate(application_service.application_stats(db))


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: str,
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return ApplicationResponse.model_validate(application_service.get_application(db, application_id))


@router.put("/admin/{application_id}", response_model=ApplicationMutationResponse)
@router.put("/{application_id}", response_model=ApplicationMutationResponse)
async def update_application(
    application_id: str,
    req: ApplicationUpdate,
    tasks: BackgroundTasks,
    admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    application = application_service.update_application(
        db,
        application_id,
        req.model_dump(exclude_unset=True),
        reviewer=admin.username,
        notifier=notifier,
        tasks=tasks,
    )
    return ApplicationMutationResponse(
        message="Application updated successfully",
        application=ApplicationResponse.model_validate(application),
    )


@router.delete("/{application_id}")
async def delete_application(
    application_id: str,
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    application_service.delete_application(db, application_id)
    return {"message": "Application deleted successfully"}
