"""Interface every outgoing mail transport implements."""

from abc import ABC, abstractmethod


class EmailProvider(ABC):
    """A transport that hands one rendered message to a mail system."""

    @abstractmethod
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
        """Deliver a rendered message.

        Returns:
            False if the transport refused the message. Transport errors may
            also be raised; ``EmailService`` turns both into a failed
            ``DeliveryResult``.
        """

    @abstractmethod
    async def test_connection(self) -> tuple[bool, str | None]:
        """Return ``(reachable, error)`` for ``tasknest check-email``."""
