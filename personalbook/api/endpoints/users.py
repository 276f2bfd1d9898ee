"""
User management endpoints (master only)
"""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from personalbook.core.database import get_db
from personalbook.modules.auth.dependencies import CallerIdentity, require_master
from personalbook.schemas.account import AccountResponse, AccountSummary, MessageResponse, UserRegister
from personalbook.services.notification_service import RegistrationNotifier, get_notifier
from personalbook.services.profile_access import profile_access

router = APIRouter()


@router.get("/list", response_model=List[AccountSummary])
async def list_users(
    caller: CallerIdentity = Depends(require_master),
    db: AsyncSession = Depends(get_db)
):
    """All registered users"""
    return await profile_access.list_users(db, caller)


@router.post("/register", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: UserRegister,
    caller: CallerIdentity = Depends(require_master),
    db: AsyncSession = Depends(get_db),
    notifier: RegistrationNotifier = Depends(get_notifier)
):
    """Register a user; the response carries the generated secretId"""
    return await profile_access.register_user(db, caller, user_data, notifier)


@router.delete("/{secret_id}", response_model=MessageResponse)
async def delete_user(
    secret_id: str,
    caller: CallerIdentity = Depends(require_master),
    db: AsyncSession = Depends(get_db)
):
    """Delete a user and their profile"""
    await profile_access.delete_user(db, caller, secret_id)
    return MessageResponse(message="User and profile deleted")
