from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from studio_api.database import get_db
from studio_api.dependencies import get_current_admin, require_super_admin
from studio_api.errors import DuplicateIdentity, FieldError, ValidationFailed
from studio_api.models.admin import AdminAccount
from studio_api.routers.auth import clear_session, login_response
from studio_api.schemas.admin import AdminCreate, AdminMutationResponse, AdminProfile, ProfileUpdate
from studio_api.schemas.auth import AdminSummary, LoginRequest, LoginResponse, VerifyResponse
from studio_api.schemas.dashboard import DashboardResponse
from studio_api.services.account_service import account_store
from studio_api.services.dashboard_service import dashboard
from studio_api.utils.security import verify_password
from studio_api.validation import ensure_valid, validate_admin_create, validate_profile_update

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=LoginResponse)
async def admin_login(req: LoginRequest, response: Response, db: Session = Depends(get_db)):
    return login_response(req, response, db)


@router.post("/logout")
async def admin_logout(response: Response):
    return clear_session(response)


@router.get("/verify", response_model=VerifyResponse)
async def verify(admin: AdminAccount = Depends(get_current_admin)):
    return VerifyResponse(admin=AdminSummary.model_validate(admin))


@router.get("/profile", response_model=AdminProfile)
async def get_profile(admin: AdminAccount = Depends(get_current_admin)):
    return AdminProfile.model_validate(admin)


@router.put("/profile", response_model=AdminMutationResponse)
async def update_profile(
    req: ProfileUpdate,
    admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    data = req.model_dump(exclude_unset=True)
    ensure_valid(validate_profile_update(data))

    new_password = data.get("new_password")
    if new_password and not verify_password(admin.password_hash, data["current_password"]):
        raise ValidationFailed(
            [FieldError("currentPassword", "Current password is incorrect")],
            "Current password is incorrect",
        )

    email = (data.get("email") or "").strip().lower()
    if email and email != admin.email:
        if account_store.email_taken(db, email, exclude_id=admin.id):
            raise DuplicateIdentity("Email already exists")
        admin.email = email

    account_store.save(db, admin, new_password=new_password)
    return AdminMutationResponse(
        message="Profile updated successfully",
        admin=AdminSummary.model_validate(admin),
    )


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    _admin: AdminAccount = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    return DashboardResponse.model_validate(dashboard(db))


@router.post("/create", response_model=AdminMutationResponse, status_code=201)
async def create_admin(
    req: AdminCreate,
    _admin: AdminAccount = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    data = req.model_dump()
    ensure_valid(validate_admin_create(data))
    account = account_store.create(db, data["username"], data["email"], data["password"], data["role"])
    return AdminMutationResponse(
        message="Admin created successfully",
        admin=AdminSummary.model_validate(account),
    )
