"""
Services package - business logic behind the HTTP endpoints
"""
from personalbook.services.auth_service import auth_service, AuthService
from personalbook.services.profile_access import profile_access, ProfileAccessController
from personalbook.services.notification_service import (
    RegistrationNotifier,
    EmailRegistrationNotifier,
    LoggingNotifier,
    get_notifier,
)

__all__ = [
    "auth_service",
    "AuthService",
    "profile_access",
    "ProfileAccessController",
    "RegistrationNotifier",
    "EmailRegistrationNotifier",
    "LoggingNotifier",
    "get_notifier",
]
