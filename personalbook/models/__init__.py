"""
Models package - imports all ORM models so Base.metadata sees them
"""
from personalbook.models.account import Account, AccountRole, MASTER_SECRET_ID
from personalbook.models.profile import Profile, LIST_SECTIONS

__all__ = ["Account", "AccountRole", "MASTER_SECRET_ID", "Profile", "LIST_SECTIONS"]
