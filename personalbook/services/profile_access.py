"""
Profile Access Controller

Mediates every read and write of accounts and profile documents:
- master-only user management (list, register, delete)
- profile read by secret id, replace by master or owner
- public read by link key, without email or secret id

Account and profile are created and deleted together in one transaction.
"""

from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from personalbook.core.config import settings
from personalbook.core.exceptions import (
    AccountNotFoundError,
    DuplicateEmailError,
    ForbiddenError,
    NotificationError,
    ProfileNotFoundError,
    PublicProfileNotFoundError,
    StorageError,
)
from personalbook.core.logging_config import logger
from personalbook.core.security import generate_public_link_key, generate_secret_id
from personalbook.models.account import Account, AccountRole
from personalbook.models.profile import LIST_SECTIONS, Profile
from personalbook.modules.auth.dependencies import CallerIdentity
from personalbook.schemas.account import UserRegister
from personalbook.schemas.profile import (
    DEFAULT_ABOUT_BIO,
    DEFAULT_ABOUT_NAME,
    ProfileDocument,
    PublicProfileResponse,
    ShareLinkResponse,
)
from personalbook.services.notification_service import RegistrationNotifier


def default_about(username: str) -> Dict[str, str]:
    """About section for a freshly registered user"""
    return {
        "name": username or DEFAULT_ABOUT_NAME,
        "bio": DEFAULT_ABOUT_BIO,
        "image": settings.get_default_avatar(username or "New"),
    }


class ProfileAccessController:
    """Authorization and persistence for accounts and profile documents"""

    @staticmethod
    def _require_master(caller: CallerIdentity) -> None:
        if not caller.is_master:
            raise ForbiddenError("Master access required")

    @staticmethod
    async def _read(db: AsyncSession, statement, context: str):
        """Run a read query, mapping storage failures to StorageError"""
        try:
            return await db.execute(statement)
        except SQLAlchemyError as e:
            logger.log_error_with_context(e, context=context)
            raise StorageError("Storage is unavailable") from e

    # ==================== USER MANAGEMENT ====================

    async def list_users(self, db: AsyncSession, caller: CallerIdentity) -> List[Account]:
        """All user-role accounts, oldest first"""
        self._require_master(caller)

        result = await self._read(
            db,
            select(Account)
            .where(Account.role == AccountRole.USER)
            .order_by(Account.created_at.asc()),
            context="list_users",
        )
        return list(result.scalars().all())

    async def _email_exists(self, db: AsyncSession, email: str) -> bool:
        result = await self._read(db, select(Account.id).where(Account.email == email), "email_exists")
        return result.scalar_one_or_none() is not None

    async def _allocate_secret_id(self, db: AsyncSession) -> str:
        """Draw random secret ids until one is unused"""
        for _ in range(settings.SECRET_ID_MAX_ATTEMPTS):
            candidate = generate_secret_id()
            result = await self._read(
                db, select(Account.id).where(Account.secret_id == candidate), "allocate_secret_id"
            )
            if result.scalar_one_or_none() is None:
                return candidate
            logger.warning("[Users] Secret id collision, drawing again")

        raise StorageError(
            f"Could not allocate a unique secret id after {settings.SECRET_ID_MAX_ATTEMPTS} attempts"
        )

    async def register_user(
        self,
        db: AsyncSession,
        caller: CallerIdentity,
        user_data: UserRegister,
        notifier: RegistrationNotifier,
    ) -> Account:
        """
        Create a user account and its default profile, then notify the user.

        Notification is best-effort: the account and profile are already
        committed when the notifier runs, and a delivery failure is logged
        without touching them.
        """
        self._require_master(caller)

        if await self._email_exists(db, user_data.email):
            logger.log_auth_event(
                event="register",
                success=False,
                user_email=user_data.email,
                reason="Email already registered",
            )
            raise DuplicateEmailError(user_data.email)

        secret_id = await self._allocate_secret_id(db)

        account = Account(
            username=user_data.username,
            email=user_data.email,
            secret_id=secret_id,
            role=AccountRole.USER,
        )
        profile = Profile(
            user_id=secret_id,
            public_link_key=generate_public_link_key(),
            about=default_about(user_data.username),
            **{section: [] for section in LIST_SECTIONS},
        )

        db.add(account)
        db.add(profile)
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            # Lost a race with a concurrent registration of the same email
            if await self._email_exists(db, user_data.email):
                raise DuplicateEmailError(user_data.email) from e
            raise StorageError("Could not create account and profile") from e
        except SQLAlchemyError as e:
            await db.rollback()
            logger.log_error_with_context(e, context="register_user")
            raise StorageError("Could not create account and profile") from e

        logger.log_auth_event(event="register", success=True, user_email=account.email)

        try:
            await notifier.notify(account.username, account.secret_id, account.email)
        except NotificationError as e:
            logger.warning(
                f"[Users] Registration notification for {account.email} failed: {e.message}",
                extra={"event_type": "notification_failed"}
            )
        except Exception as e:
            logger.log_error_with_context(e, context="registration notifier")

        return account

    async def delete_user(self, db: AsyncSession, caller: CallerIdentity, secret_id: str) -> None:
        """Delete a user account and its profile as one unit"""
        self._require_master(caller)

        result = await self._read(
            db,
            select(Account).where(
                Account.secret_id == secret_id,
                Account.role == AccountRole.USER,
            ),
            "delete_user",
        )
        account = result.scalar_one_or_none()
        if not account:
            raise AccountNotFoundError(secret_id)

        result = await self._read(db, select(Profile).where(Profile.user_id == secret_id), "delete_user")
        profile = result.scalar_one_or_none()

        try:
            if profile is not None:
                await db.delete(profile)
            await db.delete(account)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.log_error_with_context(e, context="delete_user")
            raise StorageError("Could not delete account and profile") from e

        logger.log_auth_event(event="delete", success=True, user_email=account.email)

    # ==================== PROFILES ====================

    async def get_profile(self, db: AsyncSession, user_id: str) -> Profile:
        """Profile by owner secret id (unauthenticated read)"""
        result = await self._read(db, select(Profile).where(Profile.user_id == user_id), "get_profile")
        profile = result.scalar_one_or_none()
        if not profile:
            raise ProfileNotFoundError(user_id)
        return profile

    async def replace_profile(
        self,
        db: AsyncSession,
        caller: CallerIdentity,
        user_id: str,
        document: ProfileDocument,
    ) -> Profile:
        """
        Overwrite every mutable section of a profile with `document`.

        user_id and public_link_key never change. Last write wins.
        """
        if not caller.can_manage_profile(user_id):
            logger.log_auth_event(
                event="profile_replace",
                success=False,
                reason="Caller does not own this profile",
                caller=caller.username,
            )
            raise ForbiddenError("You can only edit your own profile")

        profile = await self.get_profile(db, user_id)

        for column, value in document.section_values().items():
            setattr(profile, column, value)

        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.log_error_with_context(e, context="replace_profile")
            raise StorageError("Could not save profile") from e

        logger.info(
            f"[Profiles] Profile replaced by {caller.role.value} {caller.username}",
            extra={"event_type": "profile_replace"}
        )
        return profile

    async def get_share_link(self, db: AsyncSession, caller: CallerIdentity, user_id: str) -> ShareLinkResponse:
        """Public link for a profile the caller may manage"""
        if not caller.can_manage_profile(user_id):
            raise ForbiddenError("You can only share your own profile")

        profile = await self.get_profile(db, user_id)
        return ShareLinkResponse(
            public_link_key=profile.public_link_key,
            url=settings.get_share_url(profile.public_link_key),
        )

    async def get_public_profile(self, db: AsyncSession, public_link_key: str) -> PublicProfileResponse:
        """
        Public view by link key.

        Returns only the owner's username and the profile sections; the
        owner's email and secret id (which is also the profile's user_id)
        are never included.
        """
        result = await self._read(
            db, select(Profile).where(Profile.public_link_key == public_link_key), "get_public_profile"
        )
        profile = result.scalar_one_or_none()
        if not profile:
            raise PublicProfileNotFoundError()

        result = await self._read(
            db, select(Account.username).where(Account.secret_id == profile.user_id), "get_public_profile"
        )
        username = result.scalar_one_or_none()
        if username is None:
            raise PublicProfileNotFoundError()

        return PublicProfileResponse(
            username=username,
            profile=ProfileDocument.model_validate(profile),
        )


profile_access = ProfileAccessController()
