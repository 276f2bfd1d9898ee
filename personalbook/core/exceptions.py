"""
Custom Exceptions for Personal Book
===================================

Every failure a caller can see has its own class, a stable code and an HTTP
status. Services raise these; the handler in main.py turns them into
`{"message", "code", "details"}` responses.

Usage:
    from personalbook.core.exceptions import AccountNotFoundError

    if not account:
        raise AccountNotFoundError(secret_id)
"""

from typing import Optional, Any, Dict


class PersonalBookError(Exception):
    """Base exception for all Personal Book errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class InvalidCredentialsError(PersonalBookError):
    """Login credentials did not match any account"""

    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class UnauthenticatedError(PersonalBookError):
    """No bearer token was presented"""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHENTICATED")


class ForbiddenError(PersonalBookError):
    """Caller role or ownership does not allow this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="FORBIDDEN")


class InvalidTokenError(ForbiddenError):
    """Bearer token signature is invalid or the token has expired"""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)
        self.code = "INVALID_TOKEN"


# ============================================
# Conflict Errors (409-type)
# ============================================

class DuplicateEmailError(PersonalBookError):
    """An account with this email already exists"""

    status_code = 409

    def __init__(self, email: str):
        super().__init__(
            f"Email '{email}' is already registered",
            code="DUPLICATE_EMAIL",
            details={"email": email}
        )


# ============================================
# Resource Errors (404-type)
# ============================================

class NotFoundError(PersonalBookError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
            details={"resource_type": resource_type}
        )


class AccountNotFoundError(NotFoundError):
    """No account has this secret id"""

    def __init__(self, secret_id: str):
        super().__init__("Account", secret_id)


class ProfileNotFoundError(NotFoundError):
    """No profile exists for this user id"""

    def __init__(self, user_id: str):
        super().__init__("Profile", user_id)


class PublicProfileNotFoundError(NotFoundError):
    """Public link key does not resolve to a profile and owner"""

    def __init__(self):
        # The key itself is a credential; keep it out of the message
        super().__init__("Public profile", "requested link")
        self.message = "Public profile not found"


# ============================================
# Dependency Errors (503-type)
# ============================================

class DependencyFailureError(PersonalBookError):
    """An external dependency (storage, notifier) failed"""

    status_code = 503

    def __init__(self, message: str, code: str = "DEPENDENCY_FAILURE"):
        super().__init__(message, code=code)


class NotificationError(DependencyFailureError):
    """Registration notification could not be delivered"""

    def __init__(self, message: str = "Notification delivery failed"):
        super().__init__(message, code="NOTIFICATION_FAILED")


class StorageError(DependencyFailureError):
    """Storage operation failed"""

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message, code="STORAGE_ERROR")

