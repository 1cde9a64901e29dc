from fastapi import Depends, Request
from sqlalchemy.orm import Session

from studio_api.config import settings
from studio_api.database import get_db
from studio_api.errors import Forbidden, Unauthorized
from studio_api.models.admin import AdminAccount
from studio_api.services.auth_service import authenticator
from studio_api.services.notifications import Notifier, notifier


def read_token(request: Request) -> str | None:
    authorization = request.headers.get("Authorization", "")
    if authorization.startswith("Bearer ") and authorization[7:].strip():
        return authorization[7:].strip()
    return request.cookies.get(settings.cookie_name) or None


async def get_current_admin(request: Request, db: Session = Depends(get_db)) -> AdminAccount:
    token = read_token(request)
    if not token:
        raise Unauthorized("Access denied. No token provided.")
    return authenticator.verify_token(db, token)


async def require_super_admin(admin: AdminAccount = Depends(get_current_admin)) -> AdminAccount:
    if admin.role != "super-admin":
        raise Forbidden("Only super-admin can create new admin accounts")
    return admin


def get_notifier() -> Notifier:
    return notifier
