"""Unit tests for the password policy."""

import pytest

from tasknest.domain.exceptions import ValidationFailed
from tasknest.domain.services.password_policy import PasswordPolicy, enforce_password_policy


@pytest.mark.parametrize("password", ["Sup3rSecret", "abcdefg1", "1234567a"])
def test_acceptable_passwords(password):
    assert PasswordPolicy().validate(password) == []


def test_too_short():
    codes = [v.code for v in PasswordPolicy().validate("ab1")]

    assert codes == ["password_too_short"]


def test_missing_digit_and_letter_reported_together():
    assert [v.code for v in PasswordPolicy().validate("abcdefgh")] == ["password_no_digit"]
    assert [v.code for v in PasswordPolicy().validate("12345678")] == ["password_no_letter"]


def test_too_long():
    codes = [v.code for v in PasswordPolicy(max_length=10).validate("abcdefghij1")]

    assert codes == ["password_too_long"]


def test_enforce_raises_with_every_violation():
    with pytest.raises(ValidationFailed) as exc_info:
        enforce_password_policy("abc")

    assert exc_info.value.message == "Password must be at least 8 characters"
    assert [e["code"] for e in exc_info.value.errors] == [
        "password_too_short",
        "password_no_digit",
    ]
    assert all(e["field"] == "password" for e in exc_info.value.errors)


def test_enforce_accepts_custom_policy():
    enforce_password_policy("ab1", PasswordPolicy(min_length=3))
