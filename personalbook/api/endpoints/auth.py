from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from personalbook.core.database import get_db
from personalbook.modules.auth.dependencies import CallerIdentity, get_current_caller
from personalbook.schemas.auth import CallerResponse, LoginResponse, UserLogin
from personalbook.services.auth_service import auth_service

router = APIRouter()


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Log in as the master (email + password) or a user (email + secretId)"""
    return await auth_service.login(db, credentials)


@router.get("/me", response_model=CallerResponse)
async def me(caller: CallerIdentity = Depends(get_current_caller)):
    """Identity carried by the bearer token"""
    return CallerResponse(role=caller.role.value, id=caller.id, username=caller.username)
