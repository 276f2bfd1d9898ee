"""
Master account seed

Runs at startup: creates the master account from MASTER_* settings when
no master exists yet. Existing masters are never modified.

Run manually with: python -m personalbook.db.seed
"""
import asyncio
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from personalbook.core.config import settings
from personalbook.core.database import AsyncSessionLocal, init_db
from personalbook.core.logging_config import logger
from personalbook.core.security import get_password_hash
from personalbook.models.account import Account, AccountRole, MASTER_SECRET_ID

DEFAULT_MASTER_PASSWORD = "admin123"


async def seed_master_account(db: Optional[AsyncSession] = None) -> Optional[Account]:
    """
    Create the master account if absent.

    Returns the new account, or None when a master already exists.
    """
    if db is None:
        async with AsyncSessionLocal() as session:
            return await seed_master_account(session)

    result = await db.execute(select(Account).where(Account.role == AccountRole.MASTER))
    if result.scalars().first() is not None:
        logger.info("[Seed] Master account already exists")
        return None

    master = Account(
        username=settings.MASTER_USERNAME,
        email=settings.MASTER_EMAIL,
        hashed_password=get_password_hash(settings.MASTER_PASSWORD),
        secret_id=MASTER_SECRET_ID,
        role=AccountRole.MASTER,
    )
    db.add(master)
    await db.commit()

    logger.info(f"[Seed] Master account created: {master.email}")
    if settings.MASTER_PASSWORD == DEFAULT_MASTER_PASSWORD:
        logger.warning("[Seed] Master account uses the default password, set MASTER_PASSWORD")
    return master


async def main():
    await init_db()
    await seed_master_account()


if __name__ == "__main__":
    asyncio.run(main())
