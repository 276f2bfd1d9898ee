"""
Unit Tests for the error taxonomy
"""
from personalbook.core.exceptions import (
    AccountNotFoundError,
    DependencyFailureError,
    DuplicateEmailError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotificationError,
    PersonalBookError,
    ProfileNotFoundError,
    PublicProfileNotFoundError,
    StorageError,
    UnauthenticatedError,
)


class TestStatusCodes:

    def test_auth_errors(self):
        assert InvalidCredentialsError().status_code == 401
        assert UnauthenticatedError().status_code == 401
        assert ForbiddenError().status_code == 403
        assert InvalidTokenError().status_code == 403

    def test_invalid_token_is_forbidden(self):
        error = InvalidTokenError()

        assert isinstance(error, ForbiddenError)
        assert error.code == "INVALID_TOKEN"

    def test_conflict_and_not_found(self):
        assert DuplicateEmailError("a@b.c").status_code == 409
        assert AccountNotFoundError("123456").code == "ACCOUNT_NOT_FOUND"
        assert ProfileNotFoundError("123456").code == "PROFILE_NOT_FOUND"
        assert PublicProfileNotFoundError().status_code == 404

    def test_dependency_failures(self):
        assert isinstance(NotificationError("smtp down"), DependencyFailureError)
        assert isinstance(StorageError("db down"), DependencyFailureError)
        assert StorageError("db down").status_code == 503
        assert NotificationError("smtp down").code == "NOTIFICATION_FAILED"


def test_to_dict_shape():
    error = DuplicateEmailError("ada@example.com")

    assert error.to_dict() == {
        "code": "DUPLICATE_EMAIL",
        "message": "Email 'ada@example.com' is already registered",
        "details": {"email": "ada@example.com"},
    }


def test_public_not_found_does_not_echo_key():
    assert "details" in PublicProfileNotFoundError().to_dict()
    assert PublicProfileNotFoundError().message == "Public profile not found"


def test_status_override():
    assert PersonalBookError("teapot", status_code=418).status_code == 418
