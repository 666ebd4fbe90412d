"""Console email provider for development.

Writes outgoing mail to the structured log instead of sending it, so codes
and invitation links can be copied straight from the server output.
"""

from tasknest.core.logging import get_logger
from tasknest.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)


class ConsoleProvider(EmailProvider):
    """Logs emails to the console."""

    def __init__(self) -> None:
        self.outbox: list[dict[str, str]] = []

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
        self.outbox.append({"to": to, "subject": subject, "text_body": text_body})
        logger.info(
            "[EMAIL] Console delivery",
            to=to,
            subject=subject,
            sender=f"{from_name} <{from_email}>",
            body=text_body,
        )
        return True

    async def test_connection(self) -> tuple[bool, str | None]:
        return True, None
