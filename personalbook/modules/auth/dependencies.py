from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from personalbook.core.database import get_db
from personalbook.core.exceptions import ForbiddenError, InvalidTokenError, UnauthenticatedError
from personalbook.core.logging_config import set_caller_id
from personalbook.core.security import decode_token
from personalbook.models.account import Account, AccountRole

# auto_error=False so a missing header maps to UnauthenticatedError (401)
# instead of FastAPI's default 403
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CallerIdentity:
    """
    Identity decoded from a session token.

    For the master, `id` is the account id; for users it is the secret id.
    """
    role: AccountRole
    id: str
    username: str

    @property
    def is_master(self) -> bool:
        return self.role == AccountRole.MASTER

    def can_manage_profile(self, user_id: str) -> bool:
        """Master manages every profile, users only their own"""
        return self.is_master or self.id == user_id


def identity_from_payload(payload: dict) -> CallerIdentity:
    """Build a CallerIdentity from decoded token claims"""
    if payload.get("type") != "access":
        raise InvalidTokenError("Invalid token type")

    try:
        role = AccountRole(payload.get("role"))
    except ValueError:
        raise InvalidTokenError("Invalid token role")

    caller_id = payload.get("id")
    if not caller_id:
        raise InvalidTokenError("Invalid token payload")

    return CallerIdentity(
        role=role,
        id=str(caller_id),
        username=payload.get("username") or "",
    )


async def load_token_account(db: AsyncSession, caller: CallerIdentity, account_id: Optional[str]) -> Account:
    """
    Get the account a token was issued to.

    `sub` is the account's storage id, so a token stays bound to that one
    account even after its secret id is freed and handed to someone else.
    """
    if not account_id:
        raise InvalidTokenError("Invalid token payload")

    result = await db.execute(select(Account).where(Account.id == str(account_id)))
    account = result.scalar_one_or_none()
    if not account or account.role != caller.role:
        raise InvalidTokenError("Account no longer exists")

    expected_id = account.id if account.is_master else account.secret_id
    if caller.id != expected_id:
        raise InvalidTokenError("Account no longer exists")

    return account


async def get_current_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> CallerIdentity:
    """Get the authenticated caller from the bearer token"""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    payload = decode_token(credentials.credentials)
    caller = identity_from_payload(payload)
    await load_token_account(db, caller, payload.get("sub"))
    # Secret ids double as credentials, so logs carry role and username only
    set_caller_id(f"{caller.role.value}:{caller.username}")
    return caller


async def require_master(
    caller: CallerIdentity = Depends(get_current_caller)
) -> CallerIdentity:
    """Get the caller, failing unless it is the master"""
    if not caller.is_master:
        raise ForbiddenError("Master access required")
    return caller
