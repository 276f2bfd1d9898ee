"""
Profile endpoints

GET /profile/{user_id} is unauthenticated: anyone holding a secret id can
read that profile. Writes need a master token or the owner's token.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from personalbook.core.database import get_db
from personalbook.modules.auth.dependencies import CallerIdentity, get_current_caller
from personalbook.schemas.profile import (
    ProfileDocument,
    ProfileResponse,
    PublicProfileResponse,
    ShareLinkResponse,
)
from personalbook.services.profile_access import profile_access

router = APIRouter()


# Declared before /{user_id} so "public" is never taken for a user id
@router.get("/public/{public_link_key}", response_model=PublicProfileResponse)
async def get_public_profile(
    public_link_key: str,
    db: AsyncSession = Depends(get_db)
):
    """Read-only public view: owner username and profile sections"""
    return await profile_access.get_public_profile(db, public_link_key)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    return await profile_access.get_profile(db, user_id)


@router.put("/{user_id}", response_model=ProfileResponse)
async def replace_profile(
    user_id: str,
    document: ProfileDocument,
    caller: CallerIdentity = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    """Replace the whole profile document (omitted sections are cleared)"""
    return await profile_access.replace_profile(db, caller, user_id, document)


@router.get("/{user_id}/share", response_model=ShareLinkResponse)
async def get_share_link(
    user_id: str,
    caller: CallerIdentity = Depends(get_current_caller),
    db: AsyncSession = Depends(get_db)
):
    return await profile_access.get_share_link(db, caller, user_id)
