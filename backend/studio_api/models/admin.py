from sqlalchemy import Boolean, Column, Integer, Text
from studio_api.database import Base


class AdminAccount(Base):
    __tablename__ = "admin_accounts"

    id = Column(Text, primary_key=True)
    username = Column(Text, nullable=False, unique=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    role = Column(Text, nullable=False, default="admin")
    is_active = Column(Boolean, nullable=False, default=True)
    failed_attempts = Column(Integer, nullable=False, default=0)
    locked_until = Column(Text)
    last_login = Column(Text)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
