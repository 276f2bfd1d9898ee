from sqlalchemy import Column, String, DateTime, Enum as SQLEnum
from datetime import datetime, timezone
from typing import Optional
import enum

from personalbook.core.database import Base, generate_uuid

MASTER_SECRET_ID = "MASTER"


class AccountRole(str, enum.Enum):
    """Account roles"""
    MASTER = "master"
    USER = "user"


def format_registered_at(moment: Optional[datetime] = None) -> str:
    """Display string for the registration time, e.g. '10/19/2026, 01:14:00 PM'"""
    return (moment or datetime.now()).strftime("%m/%d/%Y, %I:%M:%S %p")


class Account(Base):
    """Identity record for the master admin and regular users"""
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)

    # Only the master logs in with a password; users log in with secret_id
    hashed_password = Column(String(255), nullable=True)
    secret_id = Column(String(16), unique=True, index=True, nullable=False)

    role = Column(SQLEnum(AccountRole), default=AccountRole.USER, nullable=False, index=True)

    registered_at = Column(String(32), default=lambda: format_registered_at(), nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    @property
    def is_master(self) -> bool:
        return self.role == AccountRole.MASTER

    def __repr__(self):
        return f"<Account {self.email} ({self.role.value if self.role else '?'})>"
