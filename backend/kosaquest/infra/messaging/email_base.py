"""Email service interface and implementations."""
import asyncio
import logging
from abc import ABC, abstractmethod

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Email, Mail, To

from kosaquest.settings import settings

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "Verify Your Email Address"


def verification_bodies(code: str) -> tuple[str, str]:
    """Plain text and HTML bodies for a verification email."""
    text = f"Your verification code is: {code}"
    html = f"""
    <div style="font-family: Arial, sans-serif; color: #222;">
        <h2>{VERIFICATION_SUBJECT}</h2>
        <p>Your verification code is:</p>
        <h1 style="color:#007bff;">{code}</h1>
        <p>If you did not request this, please ignore this email.</p>
    </div>
    """
    return text, html


class EmailService(ABC):
    """Email service interface."""

    @abstractmethod
    async def send_verification_code(self, to_email: str, code: str) -> None:
        """Send the registration verification code."""
        pass


class ConsoleEmailService(EmailService):
    """Logs verification codes instead of sending them (local development)."""

    async def send_verification_code(self, to_email: str, code: str) -> None:
        logger.info("[EMAIL] Verification code for %s: %s", to_email, code)


class SendGridEmailService(EmailService):
    """SendGrid email service for production email sending."""

    def __init__(self, api_key: str, from_email: str, from_name: str):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name

    def _build_message(self, to_email: str, code: str) -> Mail:
        text, html = verification_bodies(code)
        return Mail(
            from_email=Email(self.from_email, self.from_name),
            to_emails=To(to_email),
            subject=VERIFICATION_SUBJECT,
            plain_text_content=text,
            html_content=html,
        )

    async def send_verification_code(self, to_email: str, code: str) -> None:
        message = self._build_message(to_email, code)
        client = SendGridAPIClient(self.api_key)
        # SendGrid's client is blocking
        response = await asyncio.to_thread(client.send, message)
        if response.status_code not in (200, 201, 202):
            logger.error("[EMAIL] SendGrid rejected verification email (status %s)", response.status_code)
            raise RuntimeError(f"SendGrid API returned status {response.status_code}")
        logger.info("[EMAIL] Verification email sent (status %s)", response.status_code)


def get_email_service() -> EmailService:
    """Get the appropriate email service based on configuration."""
    if settings.sendgrid_api_key:
        return SendGridEmailService(
            api_key=settings.sendgrid_api_key,
            from_email=settings.email_from_address,
            from_name=settings.email_from_name,
        )
    logger.debug("[EMAIL] No SendGrid API key configured; verification codes go to the log")
    return ConsoleEmailService()
