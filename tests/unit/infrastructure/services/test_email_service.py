"""Unit tests for the email service and its templates."""

from unittest.mock import AsyncMock

import pytest
from jinja2 import UndefinedError

from tasknest.infrastructure.services.email import ConsoleProvider, TemplateRenderer
from tasknest.infrastructure.services.email_service import EmailService, build_email_provider
from tasknest.infrastructure.services.email.smtp_provider import SMTPProvider


@pytest.mark.asyncio
async def test_verification_code_email(email_service, console_provider):
    result = await email_service.send_verification_code("alice@example.com", "042137", "Alice")

    assert result.delivered is True
    assert result.error is None
    message = console_provider.outbox[-1]
    assert message["to"] == "alice@example.com"
    assert message["subject"] == "Verify your email for TaskNest"
    assert "Your verification code is: 042137" in message["text_body"]
    assert "10 minutes" in message["text_body"]


@pytest.mark.asyncio
async def test_password_reset_email(email_service, console_provider):
    await email_service.send_password_reset_code("alice@example.com", "998877", "Alice")

    message = console_provider.outbox[-1]
    assert message["subject"] == "Reset your TaskNest password"
    assert "Your password reset code is: 998877" in message["text_body"]


@pytest.mark.asyncio
async def test_invitation_email_contains_link_and_message(email_service, console_provider):
    await email_service.send_invitation(
        "carol@example.com",
        inviter_name="Bob",
        workspace_name="Bob's Workspace",
        token="deadbeef",
        personal_message="Come build with us",
    )

    message = console_provider.outbox[-1]
    assert message["subject"] == "Bob invited you to Bob's Workspace on TaskNest"
    assert "http://localhost:3000/invite/deadbeef" in message["text_body"]
    assert "Come build with us" in message["text_body"]
    assert "72 hours" in message["text_body"]


@pytest.mark.asyncio
async def test_invitation_email_without_personal_message(email_service, console_provider):
    await email_service.send_invitation(
        "carol@example.com", inviter_name="Bob", workspace_name="Team", token="abc"
    )

    assert '"' not in console_provider.outbox[-1]["text_body"]


@pytest.mark.asyncio
async def test_welcome_email(email_service, console_provider):
    await email_service.send_welcome("alice@example.com", "Alice")

    message = console_provider.outbox[-1]
    assert message["subject"] == "Welcome to TaskNest!"
    assert "http://localhost:3000/dashboard" in message["text_body"]


@pytest.mark.asyncio
async def test_provider_rejection_is_reported(failing_email_service):
    result = await failing_email_service.send_verification_code("a@example.com", "123456", "A")

    assert result.delivered is False
    assert result.error == "Provider rejected message"


@pytest.mark.asyncio
async def test_provider_exception_is_reported_not_raised(test_settings):
    provider = ConsoleProvider()
    provider.send_email = AsyncMock(side_effect=ConnectionError("smtp down"))
    service = EmailService(provider, settings=test_settings)

    result = await service.send_welcome("a@example.com", "A")

    assert result.delivered is False
    assert "smtp down" in result.error


def test_html_body_is_escaped():
    renderer = TemplateRenderer()

    assert renderer.render("{{ name }}", {"name": "<b>x</b>"}) == "&lt;b&gt;x&lt;/b&gt;"
    assert renderer.render("{{ name }}", {"name": "<b>x</b>"}, html=False) == "<b>x</b>"


def test_missing_template_variable_raises():
    with pytest.raises(UndefinedError):
        TemplateRenderer().render("{{ missing }}", {})


def test_build_email_provider(test_settings):
    assert isinstance(build_email_provider(test_settings), ConsoleProvider)

    smtp_settings = test_settings.model_copy(update={"email_provider": "smtp"})
    assert isinstance(build_email_provider(smtp_settings), SMTPProvider)
