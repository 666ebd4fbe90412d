"""SMTP email provider implementation.

Uses aiosmtplib for asynchronous email sending via SMTP.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib
from pydantic import BaseModel, ConfigDict

from tasknest.core.logging import get_logger
from tasknest.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)


class SMTPSettings(BaseModel):
    """Configuration settings for the SMTP provider."""

    model_config = ConfigDict(from_attributes=True)

    host: str
    port: int = 587
    username: str = ""
    password: str = ""
    use_tls: bool = True
    use_ssl: bool = False
    from_email: str
    from_name: str = "TaskNest"
    reply_to: str | None = None
    timeout: int = 10

    @classmethod
    def from_app_settings(cls, settings) -> "SMTPSettings":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            use_ssl=settings.smtp_use_ssl,
            from_email=settings.email_from,
            from_name=settings.email_from_name,
            timeout=settings.smtp_timeout,
        )


class SMTPProvider(EmailProvider):
    """SMTP email provider implementation."""

    def __init__(self, settings: SMTPSettings) -> None:
        self.settings = settings

    def _client(self) -> aiosmtplib.SMTP:
        # aiosmtplib's use_tls means implicit TLS on connect, i.e. our use_ssl.
        return aiosmtplib.SMTP(
            hostname=self.settings.host,
            port=self.settings.port,
            use_tls=self.settings.use_ssl,
            timeout=self.settings.timeout,
        )

    async def _prepare(self, smtp: aiosmtplib.SMTP) -> None:
        if self.settings.use_tls and not self.settings.use_ssl:
            await smtp.starttls()
        if self.settings.username:
            await smtp.login(self.settings.username, self.settings.password)

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> bool:
        """Send an email via SMTP.

        Raises:
            Exception: If SMTP connection or sending fails.
        """
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = f"{from_name or self.settings.from_name} <{from_email or self.settings.from_email}>"
        message["To"] = to

        reply_addr = reply_to or self.settings.reply_to
        if reply_addr:
            message["Reply-To"] = reply_addr

        message.attach(MIMEText(text_body, "plain"))
        message.attach(MIMEText(html_body, "html"))

        try:
            async with self._client() as smtp:
                await self._prepare(smtp)
                await smtp.send_message(message)
            return True
        except Exception as e:
            logger.error("Failed to send email via SMTP", host=self.settings.host, error=str(e))
            raise

    async def test_connection(self) -> tuple[bool, str | None]:
        """Test the SMTP connection and authentication."""
        try:
            async with self._client() as smtp:
                await self._prepare(smtp)
            return True, None
        except Exception as e:
            error_msg = f"SMTP connection failed: {str(e)}"
            logger.error(error_msg, host=self.settings.host)
            return False, error_msg
