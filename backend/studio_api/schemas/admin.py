from studio_api.schemas.auth import AdminSummary
from studio_api.schemas.base import CamelModel


class AdminCreate(CamelModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None
    role: str = "admin"


class ProfileUpdate(CamelModel):
    email: str | None = None
    current_password: str | None = None
    new_password: str | None = None


class AdminProfile(AdminSummary):
    failed_attempts: int
    locked_until: str | None = None
    created_at: str
    updated_at: str


class AdminMutationResponse(CamelModel):
    message: str
    admin: AdminSummary
