"""Unit tests for the password reset flow."""

from datetime import timedelta

import pytest

from tasknest.domain.entities import MAX_ATTEMPTS, AccountStatus, CodePurpose
from tasknest.domain.exceptions import (
    AlreadyUsed,
    CodeExpired,
    CodeNotFound,
    DeliveryFailed,
    TooManyAttempts,
    ValidationFailed,
)
from tasknest.domain.expiry import utcnow
from tasknest.domain.services import PasswordResetService
from tasknest.domain.services.otp_service import OTPService
from tasknest.infrastructure.auth import verify_password

EMAIL = "alice@example.com"
NEW_PASSWORD = "Brand5NewPass"


def _service(memory_db, email_service) -> PasswordResetService:
    return PasswordResetService(memory_db.store(), email_service)


@pytest.mark.asyncio
async def test_request_reset_emails_code(memory_db, email_service, make_account, latest_code):
    await make_account(EMAIL, name="Alice")

    await _service(memory_db, email_service).request_reset("Alice@Example.com")

    code = await memory_db.store().one_time_codes.find_unused(EMAIL, CodePurpose.PASSWORD_RESET)
    assert code.code == latest_code(EMAIL)


@pytest.mark.asyncio
async def test_request_reset_unknown_email_is_silent(memory_db, email_service, console_provider):
    await _service(memory_db, email_service).request_reset("ghost@example.com")

    assert console_provider.outbox == []
    assert memory_db.state.one_time_codes == {}


@pytest.mark.asyncio
async def test_request_reset_inactive_account_is_silent(
    memory_db, email_service, make_account, console_provider
):
    account = await make_account(EMAIL)
    memory_db.state.accounts[account.id].status = AccountStatus.INACTIVE

    await _service(memory_db, email_service).request_reset(EMAIL)

    assert console_provider.outbox == []


@pytest.mark.asyncio
async def test_request_reset_delivery_failure(memory_db, failing_email_service, make_account):
    await make_account(EMAIL)

    with pytest.raises(DeliveryFailed):
        await PasswordResetService(memory_db.store(), failing_email_service).request_reset(EMAIL)

    assert memory_db.state.one_time_codes == {}


@pytest.mark.asyncio
async def test_reset_password(memory_db, email_service, make_account, latest_code):
    await make_account(EMAIL)
    await _service(memory_db, email_service).request_reset(EMAIL)

    await _service(memory_db, email_service).reset_password(EMAIL, latest_code(EMAIL), NEW_PASSWORD)

    account = await memory_db.store().accounts.get_by_email(EMAIL)
    assert verify_password(NEW_PASSWORD, account.password_hash)
    with pytest.raises(AlreadyUsed):
        await _service(memory_db, email_service).reset_password(
            EMAIL, latest_code(EMAIL), "Yet4notherPass"
        )


@pytest.mark.asyncio
async def test_reset_weak_password_keeps_code(memory_db, email_service, make_account, latest_code):
    await make_account(EMAIL)
    await _service(memory_db, email_service).request_reset(EMAIL)

    with pytest.raises(ValidationFailed):
        await _service(memory_db, email_service).reset_password(EMAIL, latest_code(EMAIL), "weak")

    code = await memory_db.store().one_time_codes.find_unused(EMAIL, CodePurpose.PASSWORD_RESET)
    assert code.attempts == 0


@pytest.mark.asyncio
async def test_verification_code_cannot_reset_password(memory_db, email_service, make_account):
    await make_account(EMAIL)
    store = memory_db.store()
    code = await OTPService(store).issue(EMAIL, CodePurpose.EMAIL_VERIFICATION)
    await store.commit()

    with pytest.raises(CodeNotFound):
        await _service(memory_db, email_service).reset_password(EMAIL, code, NEW_PASSWORD)


@pytest.mark.asyncio
async def test_wrong_codes_lock_reset(memory_db, email_service, make_account, latest_code):
    await make_account(EMAIL)
    await _service(memory_db, email_service).request_reset(EMAIL)
    real = latest_code(EMAIL)
    wrong = "000000" if real != "000000" else "111111"

    for _ in range(MAX_ATTEMPTS):
        with pytest.raises(CodeNotFound):
            await _service(memory_db, email_service).reset_password(EMAIL, wrong, NEW_PASSWORD)

    with pytest.raises(TooManyAttempts):
        await _service(memory_db, email_service).reset_password(EMAIL, real, NEW_PASSWORD)


@pytest.mark.asyncio
async def test_expired_reset_code(memory_db, email_service, make_account, latest_code):
    await make_account(EMAIL)
    await _service(memory_db, email_service).request_reset(EMAIL)
    for record in memory_db.state.one_time_codes.values():
        record.expires_at = utcnow() - timedelta(minutes=1)

    with pytest.raises(CodeExpired):
        await _service(memory_db, email_service).reset_password(EMAIL, latest_code(EMAIL), NEW_PASSWORD)
