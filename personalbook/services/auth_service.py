"""
Auth Service - login for the two account roles

master: email + password (bcrypt hash)
user:   email + 6-digit secret id

Tokens are stateless JWTs carrying {role, id, username}; there is no
session table.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from personalbook.core.exceptions import InvalidCredentialsError
from personalbook.core.logging_config import logger
from personalbook.core.security import create_access_token, verify_password
from personalbook.models.account import Account, AccountRole
from personalbook.schemas.auth import LoginResponse, UserLogin


class AuthService:
    """Issues session tokens for valid credentials"""

    def issue_token(self, account: Account) -> str:
        """Create the bearer token for an account"""
        # Users are addressed by secret id everywhere, the master by account id
        subject_id = account.id if account.is_master else account.secret_id
        return create_access_token({
            "sub": account.id,
            "role": account.role.value,
            "id": subject_id,
            "username": account.username,
        })

    async def login(self, db: AsyncSession, credentials: UserLogin) -> LoginResponse:
        if credentials.type == AccountRole.MASTER.value:
            return await self._login_master(db, credentials)
        return await self._login_user(db, credentials)

    async def _login_master(self, db: AsyncSession, credentials: UserLogin) -> LoginResponse:
        result = await db.execute(
            select(Account).where(
                Account.email == credentials.email,
                Account.role == AccountRole.MASTER,
            )
        )
        account = result.scalar_one_or_none()

        if not account or not verify_password(credentials.password or "", account.hashed_password):
            logger.log_auth_event(
                event="login",
                success=False,
                user_email=credentials.email,
                reason="Invalid admin credentials",
                login_type="master",
            )
            raise InvalidCredentialsError("Invalid Admin Credentials")

        logger.log_auth_event(event="login", success=True, user_email=account.email, login_type="master")
        return LoginResponse(
            token=self.issue_token(account),
            role=account.role.value,
            username=account.username,
        )

    async def _login_user(self, db: AsyncSession, credentials: UserLogin) -> LoginResponse:
        result = await db.execute(
            select(Account).where(
                Account.email == credentials.email,
                Account.secret_id == credentials.secret_id,
                Account.role == AccountRole.USER,
            )
        )
        account = result.scalar_one_or_none()

        if not account:
            logger.log_auth_event(
                event="login",
                success=False,
                user_email=credentials.email,
                reason="No user with this email and secret id",
                login_type="user",
            )
            raise InvalidCredentialsError("Invalid Email or User ID")

        logger.log_auth_event(event="login", success=True, user_email=account.email, login_type="user")
        return LoginResponse(
            token=self.issue_token(account),
            role=account.role.value,
            username=account.username,
            id=account.secret_id,
        )


auth_service = AuthService()
