"""
Unit Tests for the master account seed
"""
import pytest
from sqlalchemy import func, select

from personalbook.core.config import settings
from personalbook.core.security import verify_password
from personalbook.db.seed import seed_master_account
from personalbook.models.account import Account, AccountRole, MASTER_SECRET_ID


@pytest.mark.asyncio
async def test_seed_creates_master(db_session):
    master = await seed_master_account(db_session)

    assert master.role == AccountRole.MASTER
    assert master.secret_id == MASTER_SECRET_ID
    assert master.email == settings.MASTER_EMAIL
    assert master.hashed_password != settings.MASTER_PASSWORD
    assert verify_password(settings.MASTER_PASSWORD, master.hashed_password)


@pytest.mark.asyncio
async def test_seed_is_idempotent(db_session):
    await seed_master_account(db_session)

    assert await seed_master_account(db_session) is None
    count = await db_session.scalar(
        select(func.count()).select_from(Account).where(Account.role == AccountRole.MASTER)
    )
    assert count == 1
