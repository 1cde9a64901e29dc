from studio_api.schemas.base import CamelModel


class LoginRequest(CamelModel):
    username: str | None = None
    password: str | None = None


class AdminSummary(CamelModel):
    id: str
    username: str
    email: str
    role: str
    is_active: bool
    last_login: str | None = None


class LoginResponse(CamelModel):
    success: bool = True
    message: str = "Login successful"
    admin: AdminSummary
    token: str


class AuthStatusResponse(CamelModel):
    authenticated: bool
    admin: AdminSummary | None = None


class VerifyResponse(CamelModel):
    valid: bool = True
    admin: AdminSummary
