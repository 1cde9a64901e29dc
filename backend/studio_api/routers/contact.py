from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from studio_api.database import get_db
from studio_api.dependencies import get_current_admin, get_notifier
from studio_api.models.admin import AdminAccount
from studio_api.schemas.contact import (
    ContactCreate,
    ContactListResponse,
    ContactMutationResponse,
    ContactResponse,
    ContactStatsResponse,
    ContactSubmitted,
    ContactUpdate,
)
from studio_api.services import contact_service
from studio_api.services.notifications import Notifier

router = APIRouter(prefix="/contact", tags=["contact"])


@router.get("")
async def contact_ping():
    return {"message": "Contact API is working", "status": "active"}


@router.post("", response_model=ContactSubmitted, status_code=201)
async def submit_contact(
    req: ContactCreate,
    tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    contact = contact_service.submit_contact(db, req.model_dump(), notifier, tasks)
    return ContactSubmitted(contact_id=contact.id)


@router.get("/admin", response_model=ContactListResponse)
async def list_contacts(
    status: str | None = None,
    priority: str | None = None,
    assigned_to: str | None = Query(None, alias="assignedTo"),
    limit: int = Query(contact_service.LIST_LIMIT, ge=1, le=contact_service.LIST_LIMIT),
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    contacts, total = contact_service.list_contacts(db, status, priority, assigned_to, limit)
    return ContactListResponse(
        contacts=[ContactResponse.model_validate(c) for c in contacts],
        total=total,
    )


@router.get("/admin/stats", response_model=ContactStatsResponse)
async def get_contact_stats(
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return ContactStatsResponse.model_validate(contact_service.contact_stats(db))


@router.get("/admin/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: str,
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return ContactResponse.model_validate(contact_service.get_contact(db, contact_id))


@router.put("/admin/{contact_id}", response_model=ContactMutationResponse)
async def update_contact(
    contact_id: str,
    req: ContactUpdate,
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    contact = contact_service.update_contact(db, contact_id, req.model_dump(exclude_unset=True))
    return ContactMutationResponse(
        message="Contact updated successfully",
        contact=ContactResponse.model_validate(contact),
    )


@router.delete("/admin/{contact_id}")
async def delete_contact(
    contact_id: str,
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    contact_service.delete_contact(db, contact_id)
    return {"message": "Contact deleted successfully"}
