"""Email providers and template rendering."""

from tasknest.infrastructure.services.email.console_provider import ConsoleProvider
from tasknest.infrastructure.services.email.email_provider import EmailProvider
from tasknest.infrastructure.services.email.smtp_provider import SMTPProvider, SMTPSettings
from tasknest.infrastructure.services.email.template_renderer import (
    TemplateRenderer,
    get_template_renderer,
)

__all__ = [
    "ConsoleProvider",
    "EmailProvider",
    "SMTPProvider",
    "SMTPSettings",
    "TemplateRenderer",
    "get_template_renderer",
]
