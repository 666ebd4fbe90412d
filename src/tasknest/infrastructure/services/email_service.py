"""Email service for lifecycle notifications.

Renders the built-in templates and hands them to the configured provider.
Delivery failures are reported through ``DeliveryResult`` rather than
raised, so callers can roll back the token record that needed the email.
"""

from dataclasses import dataclass

from tasknest.core.config import get_settings
from tasknest.core.logging import get_logger
from tasknest.infrastructure.services.email import templates
from tasknest.infrastructure.services.email.console_provider import ConsoleProvider
from tasknest.infrastructure.services.email.email_provider import EmailProvider
from tasknest.infrastructure.services.email.smtp_provider import SMTPProvider, SMTPSettings
from tasknest.infrastructure.services.email.template_renderer import (
    TemplateRenderer,
    get_template_renderer,
)

logger = get_logger(__name__)


@dataclass
class DeliveryResult:
    """Outcome of a single email delivery."""

    delivered: bool
    error: str | None = None


class EmailService:
    """Sends verification codes, invitations and welcome emails."""

    def __init__(
        self,
        provider: EmailProvider,
        renderer: TemplateRenderer | None = None,
        settings=None,
    ) -> None:
        self.provider = provider
        self.renderer = renderer or get_template_renderer()
        self.settings = settings or get_settings()

    async def send_verification_code(self, email: str, code: str, display_name: str) -> DeliveryResult:
        return await self._send(
            email,
            templates.VERIFICATION_CODE,
            name=display_name,
            code=code,
            expiry_minutes=self.settings.otp_expiry_minutes,
        )

    async def send_password_reset_code(self, email: str, code: str, display_name: str) -> DeliveryResult:
        return await self._send(
            email,
            templates.PASSWORD_RESET_CODE,
            name=display_name,
            code=code,
            expiry_minutes=self.settings.otp_expiry_minutes,
        )

    async def send_invitation(
        self,
        email: str,
        inviter_name: str,
        workspace_name: str,
        token: str,
        personal_message: str | None = None,
    ) -> DeliveryResult:
        invitation_url = f"{self.settings.frontend_url.rstrip('/')}/invite/{token}"
        return await self._send(
            email,
            templates.INVITATION,
            inviter_name=inviter_name,
            workspace_name=workspace_name,
            personal_message=personal_message or "",
            invitation_url=invitation_url,
            expiry_hours=self.settings.invitation_expiry_hours,
        )

    async def send_welcome(self, email: str, display_name: str) -> DeliveryResult:
        return await self._send(
            email,
            templates.WELCOME,
            name=display_name,
            dashboard_url=f"{self.settings.frontend_url.rstrip('/')}/dashboard",
        )

    async def _send(self, to: str, template: templates.EmailTemplate, **variables: object) -> DeliveryResult:
        variables.setdefault("app_name", self.settings.app_name)
        try:
            subject = self.renderer.render(template.subject, variables, html=False)
            html_body = self.renderer.render(template.html_body, variables)
            text_body = self.renderer.render(template.text_body, variables, html=False)
            sent = await self.provider.send_email(
                to=to,
                subject=subject.strip(),
                html_body=html_body,
                text_body=text_body,
                from_email=self.settings.email_from,
                from_name=self.settings.email_from_name,
            )
        except Exception as e:
            logger.error("Email delivery failed", to=to, error=str(e))
            return DeliveryResult(delivered=False, error=str(e))

        if not sent:
            logger.error("Email provider rejected message", to=to)
            return DeliveryResult(delivered=False, error="Provider rejected message")

        logger.info("Email delivered", to=to, subject=subject.strip())
        return DeliveryResult(delivered=True)


def build_email_provider(settings=None) -> EmailProvider:
    """Create the provider selected by ``email_provider``."""
    settings = settings or get_settings()
    if settings.email_provider == "smtp":
        return SMTPProvider(SMTPSettings.from_app_settings(settings))
    return ConsoleProvider()


# Global email service instance
_email_service: EmailService | None = None


def get_email_service() -> EmailService:
    """Get the global email service instance."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService(build_email_provider())
    return _email_service
