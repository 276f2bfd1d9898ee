"""
Registration notification hook
==============================
Tells a newly registered user their login details.

The profile access controller calls `notify()` after the account and
profile are committed. Implementations raise NotificationError when
delivery fails; the controller decides what that means for registration.
"""

import html
import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional, Protocol

from personalbook.core.config import settings
from personalbook.core.exceptions import NotificationError
from personalbook.core.logging_config import logger


class RegistrationNotifier(Protocol):
    async def notify(self, username: str, secret_id: str, email: str) -> None:
        ...


class LoggingNotifier:
    """Records the registration without delivering anything"""

    async def notify(self, username: str, secret_id: str, email: str) -> None:
        logger.info(
            f"[Notify] Delivery disabled, registration of {username} <{email}> not sent",
            extra={"event_type": "notification_skipped"}
        )


class EmailRegistrationNotifier:
    """Sends the welcome email over SMTP"""

    subject = "Your Personal Book Registration Details"

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.start_tls = settings.SMTP_START_TLS
        self.from_email = settings.EMAIL_FROM
        self.from_name = settings.EMAIL_FROM_NAME

    @property
    def is_configured(self) -> bool:
        """Check if SMTP credentials are present"""
        return bool(self.smtp_host and self.smtp_user and self.smtp_password)

    def build_message(self, username: str, secret_id: str, email: str) -> MIMEMultipart:
        """Build the multipart welcome message"""
        text_content = (
            f"Welcome to Personal Book, {username}! "
            f"Your Secret User ID is: {secret_id}. Use it with {email} to log in."
        )
        safe_username = html.escape(username)
        safe_email = html.escape(email)
        html_content = f"""
        <html>
        <body>
            <h2>Welcome to Personal Book, {safe_username}!</h2>
            <p>Your master admin has successfully registered you.</p>
            <p>Use the following details to log in:</p>
            <p><strong>Email:</strong> {safe_email}</p>
            <p><strong>Secret User ID:</strong> <code>{html.escape(secret_id)}</code></p>
            <br/>
            <p>This is your unique ID to access and manage your profile.</p>
        </body>
        </html>
        """

        message = MIMEMultipart("alternative")
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = email
        message["Subject"] = self.subject
        message.attach(MIMEText(text_content, "plain"))
        message.attach(MIMEText(html_content, "html"))
        return message

    async def notify(self, username: str, secret_id: str, email: str) -> None:
        if not self.is_configured:
            raise NotificationError("SMTP is not configured")

        message = self.build_message(username, secret_id, email)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user,
                password=self.smtp_password,
                start_tls=self.start_tls
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"[Email/SMTP] Failed to send registration email to {email}: {e}")
            raise NotificationError(f"Email delivery failed: {type(e).__name__}") from e

        logger.info(f"[Email/SMTP] Registration email sent to {email}")


_notifier: Optional[RegistrationNotifier] = None


def get_notifier() -> RegistrationNotifier:
    """FastAPI dependency returning the configured notifier"""
    global _notifier
    if _notifier is None:
        email_notifier = EmailRegistrationNotifier()
        if settings.NOTIFICATIONS_ENABLED and email_notifier.is_configured:
            _notifier = email_notifier
        else:
            logger.info("[Notify] SMTP not configured or notifications disabled, using log-only notifier")
            _notifier = LoggingNotifier()
    return _notifier
