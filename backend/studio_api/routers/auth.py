from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from studio_api.config import settings
from studio_api.database import get_db
from studio_api.dependencies import read_token
from studio_api.errors import Unauthorized
from studio_api.schemas.auth import AdminSummary, AuthStatusResponse, LoginRequest, LoginResponse
from studio_api.services.auth_service import authenticator
from studio_api.validation import ensure_valid, validate_login

router = APIRouter(prefix="/auth", tags=["auth"])


def login_response(req: LoginRequest, response: Response, db: Session) -> LoginResponse:
    ensure_valid(validate_login(req.model_dump()))
    result = authenticator.authenticate(db, req.username.strip(), req.password)
    response.set_cookie(
        settings.cookie_name,
        result.token,
        max_age=settings.token_ttl_hours * 3600,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return LoginResponse(admin=AdminSummary.model_validate(result.account), token=result.token)


def clear_session(response: Response) -> dict:
    response.delete_cookie(
        settings.cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return {"message": "Logout successful"}


@router.post("/login", response_model=LoginResponse)
async def login(req: LoginRequest, response: Response, db: Session = Depends(get_db)):
    return login_response(req, response, db)


@router.get("", response_model=AuthStatusResponse)
async def auth_status(request: Request, db: Session = Depends(get_db)):
    token = read_token(request)
    if not token:
        return AuthStatusResponse(authenticated=False)
    try:
        account = authenticator.verify_token(db, token)
    except Unauthorized:
        return AuthStatusResponse(authenticated=False)
    return AuthStatusResponse(authenticated=True, admin=AdminSummary.model_validate(account))


@router.post("/logout")
async def logout(response: Response):
    return clear_session(response)


@router.delete("")
async def logout_delete(response: Response):
    return clear_session(response)
