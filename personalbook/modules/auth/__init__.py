"""
Auth module - bearer token extraction and role guards

Usage:
    from personalbook.modules.auth import CallerIdentity, get_current_caller, require_master

    @router.get("/users/list")
    async def list_users(caller: CallerIdentity = Depends(require_master)):
        ...
"""

from personalbook.modules.auth.dependencies import (
    CallerIdentity,
    get_current_caller,
    require_master,
)

__all__ = [
    "CallerIdentity",
    "get_current_caller",
    "require_master",
]
