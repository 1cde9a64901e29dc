import logging
import secrets
from dataclasses import dataclass
from datetime import datetime

import jwt
from sqlalchemy.orm import Session

from studio_api.errors import AccountDeactivated, AccountLocked, InvalidCredentials, Unauthorized
from studio_api.models.admin import AdminAccount
from studio_api.services.account_service import account_store
from studio_api.utils.clock import to_iso, utcnow
from studio_api.utils.security import decode_token, encode_token, hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    token: str
    account: AdminAccount


class Authenticator:
    def __init__(self):
        self._dummy_hash: str | None = None

    def _verify_dummy(self, password: str):
        # Unknown usernames pay the same argon2 cost as a wrong password.
        if self._dummy_hash is None:
            self._dummy_hash = hash_password(secrets.token_hex(16))
        verify_password(self._dummy_hash, password)

    def authenticate(self, db: Session, username: str, password: str, now: datetime | None = None) -> LoginResult:
        now = now or utcnow()
        account = account_store.get_by_username(db, username)
        if account is None:
            self._verify_dummy(password)
            raise InvalidCredentials()

        # Lock is checked before the password so a locked account leaks nothing.
        if account.locked_until and account.locked_until > to_iso(now):
            raise AccountLocked()
        if not account.is_active:
            raise AccountDeactivated()

        if not verify_password(account.password_hash, password):
            account_store.record_failed_attempt(db, account, now)
            raise InvalidCredentials()

        account_store.record_successful_login(db, account, now)
        logger.info("Admin %s logged in", account.username)
        return LoginResult(token=self.issue_token(account, now), account=account)

    def issue_token(self, account: AdminAccount, issued_at: datetime | None = None) -> str:
        return encode_token(
            {"sub": account.id, "username": account.username, "role": account.role},
            issued_at,
        )

    def verify_token(self, db: Session, token: str) -> AdminAccount:
        try:
            claims = decode_token(token)
        except jwt.ExpiredSignatureError:
            raise Unauthorized("Token has expired")
        except jwt.InvalidTokenError:
            raise Unauthorized("Invalid token")

        account = account_store.get(db, claims["sub"])
        if account is None or not account.is_active:
            raise Unauthorized("Invalid token")
        return account


authenticator = Authenticator()
