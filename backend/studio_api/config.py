from pathlib import Path
from pydantic_settings import BaseSettings


DEV_JWT_SECRET = "studio-api-development-secret-change-me"


class Settings(BaseSettings):
    data_dir: Path = Path.home() / "StudioData"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    studio_name: str = "RBSH Studio"

    # Session tokens
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24
    cookie_name: str = "token"
    cookie_secure: bool = False

    # Lockout policy
    max_login_attempts: int = 5
    lockout_minutes: int = 120

    # Submission policy
    contact_duplicate_window_hours: int = 24
    min_cover_letter_chars: int = 100

    # Mail; an empty smtp_host logs messages instead of sending them
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    mail_from: str = "no-reply@rbshstudio.com"
    operator_email: str = ""

    # Bootstrap account, created only when the store is empty
    default_admin_username: str = "admin"
    default_admin_email: str = "admin@rbshstudio.com"
    default_admin_password: str = "admin123"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "studio.sqlite"

    model_config = {"env_prefix": "STUDIO_"}


settings = Settings()
