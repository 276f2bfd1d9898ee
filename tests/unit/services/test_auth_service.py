"""
Unit Tests for the Auth Service
"""
import pytest

from personalbook.core.config import settings
from personalbook.core.exceptions import InvalidCredentialsError
from personalbook.core.security import decode_token
from personalbook.modules.auth.dependencies import identity_from_payload
from personalbook.models.account import AccountRole
from personalbook.schemas.auth import UserLogin
from personalbook.services.auth_service import auth_service


class TestLogin:

    @pytest.mark.asyncio
    async def test_master_token_identity(self, db_session, master_account):
        response = await auth_service.login(db_session, UserLogin(
            type="master", email=master_account.email, password=settings.MASTER_PASSWORD
        ))

        caller = identity_from_payload(decode_token(response.token))
        assert caller.role == AccountRole.MASTER
        assert caller.id == master_account.id
        assert response.id is None
        assert decode_token(response.token)["sub"] == master_account.id

    @pytest.mark.asyncio
    async def test_user_token_identity(self, db_session, test_user):
        response = await auth_service.login(db_session, UserLogin(
            type="user", email=test_user.email, secret_id=test_user.secret_id
        ))

        caller = identity_from_payload(decode_token(response.token))
        assert caller.role == AccountRole.USER
        assert caller.id == test_user.secret_id
        assert caller.can_manage_profile(test_user.secret_id)
        assert not caller.can_manage_profile("654321")
        assert decode_token(response.token)["sub"] == test_user.id

    @pytest.mark.asyncio
    async def test_unknown_email(self, db_session, master_account):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.login(db_session, UserLogin(
                type="master", email="nobody@example.com", password=settings.MASTER_PASSWORD
            ))

    @pytest.mark.asyncio
    async def test_user_email_with_wrong_secret(self, db_session, test_user):
        wrong = "100000" if test_user.secret_id != "100000" else "100001"

        with pytest.raises(InvalidCredentialsError):
            await auth_service.login(db_session, UserLogin(type="user", email=test_user.email, secret_id=wrong))


def test_issue_token_claims(master_account, test_user):
    master_claims = decode_token(auth_service.issue_token(master_account))
    user_claims = decode_token(auth_service.issue_token(test_user))

    assert master_claims["id"] == master_account.id
    assert master_claims["username"] == master_account.username
    assert user_claims["id"] == test_user.secret_id
    assert user_claims["role"] == "user"
