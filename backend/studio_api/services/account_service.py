import logging
from datetime import datetime, timedelta

from sqlalchemy import func, or_, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studio_api.config import settings
from studio_api.errors import DuplicateIdentity
from studio_api.models.admin import AdminAccount
from studio_api.utils.clock import new_id, to_iso, utcnow
from studio_api.utils.security import hash_password

logger = logging.getLogger(__name__)


class AccountStore:
    """Persistence and hashing boundary for administrator accounts."""

    def get(self, db: Session, account_id: str) -> AdminAccount | None:
        return db.get(AdminAccount, account_id)

    def get_by_username(self, db: Session, username: str) -> AdminAccount | None:
        return db.query(AdminAccount).filter(AdminAccount.username == username).first()

    def create(
        self,
        db: Session,
        username: str,
        email: str,
        password: str,
        role: str = "admin",
        is_active: bool = True,
    ) -> AdminAccount:
        username = username.strip()
        email = email.strip().lower()
        existing = (
            db.query(AdminAccount)
            .filter(or_(AdminAccount.username == username, func.lower(AdminAccount.email) == email))
            .first()
        )
        if existing:
            raise DuplicateIdentity()

        now = to_iso(utcnow())
        account = AdminAccount(
            id=new_id(),
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role,
            is_active=is_active,
            failed_attempts=0,
            created_at=now,
            updated_at=now,
        )
        db.add(account)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise DuplicateIdentity()
        db.refresh(account)
        return account

    def save(self, db: Session, account: AdminAccount, new_password: str | None = None) -> AdminAccount:
        # Only a freshly supplied plaintext is hashed; the stored hash is never re-hashed.
        if new_password:
            account.password_hash = hash_password(new_password)
        account.email = account.email.strip().lower()
        account.updated_at = to_iso(utcnow())
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise DuplicateIdentity("Email already exists")
        db.refresh(account)
        return account

    def email_taken(self, db: Session, email: str, exclude_id: str | None = None) -> bool:
        query = db.query(AdminAccount).filter(func.lower(AdminAccount.email) == email.strip().lower())
        if exclude_id:
            query = query.filter(AdminAccount.id != exclude_id)
        return query.first() is not None

    def record_failed_attempt(self, db: Session, account: AdminAccount, now: datetime | None = None) -> bool:
        """Count one failed login in a single statement. Returns True if it locked the account."""
        now = now or utcnow()
        locked_until = to_iso(now + timedelta(minutes=settings.lockout_minutes))
        db.execute(
            text(
                """
                UPDATE admin_accounts SET
                    locked_until = CASE WHEN failed_attempts + 1 >= :max_attempts
                                        THEN :locked_until ELSE locked_until END,
                    failed_attempts = CASE WHEN failed_attempts + 1 >= :max_attempts
                                           THEN 0 ELSE failed_attempts + 1 END,
                    updated_at = :now
                WHERE id = :id
                """
            ),
            {
                "id": account.id,
                "max_attempts": settings.max_login_attempts,
                "locked_until": locked_until,
                "now": to_iso(now),
            },
        )
        db.commit()
        db.refresh(account)
        locked = account.locked_until == locked_until
        if locked:
            logger.warning("Account %s locked until %s", account.username, locked_until)
        return locked

    def record_successful_login(self, db: Session, account: AdminAccount, now: datetime | None = None):
        stamp = to_iso(now or utcnow())
        db.execute(
            text(
                """
                UPDATE admin_accounts SET
                    failed_attempts = 0,
                    locked_until = NULL,
                    last_login = :now,
                    updated_at = :now
                WHERE id = :id
                """
            ),
            {"id": account.id, "now": stamp},
        )
        db.commit()
        db.refresh(account)

    def ensure_default_account(self, db: Session) -> AdminAccount | None:
        if db.query(AdminAccount).count() > 0:
            return None
        account = self.create(
            db,
            settings.default_admin_username,
            settings.default_admin_email,
            settings.default_admin_password,
            role="super-admin",
        )
        logger.info("Default admin account created: %s", account.username)
        return account


account_store = AccountStore()
