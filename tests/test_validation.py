import pytest

from webapi.users.schemas import UserInfoDto
from webapi.users.validation import (
    FIRST_NAME_MESSAGE,
    LAST_NAME_MESSAGE,
    LOGIN_MESSAGE,
    UserValidator,
    ValidationResult,
    is_valid_login,
)


@pytest.mark.parametrize("login", ["john", "John42", "Ωμέγα", "李雷", "007"])
def test_valid_logins(login):
    assert is_valid_login(login)


@pytest.mark.parametrize("login", [None, "", " ", "john doe", "john_doe", "a.b", "x!", "tab\t", "²", "１２３", "١٢٣", "user٣"])
def test_invalid_logins(login):
    assert not is_valid_login(login)


def test_validate_login_only_ignores_names():
    result = UserValidator().validate_login(UserInfoDto(login="john"))
    assert result.is_valid


def test_validate_full_collects_every_error():
    result = UserValidator().validate_full(UserInfoDto(login="bad login", first_name="", last_name=None))

    assert not result.is_valid
    assert result.errors == {
        "login": [LOGIN_MESSAGE],
        "firstName": [FIRST_NAME_MESSAGE],
        "lastName": [LAST_NAME_MESSAGE],
    }


def test_validate_full_passes():
    result = UserValidator().validate_full(UserInfoDto(login="john", first_name="John", last_name="Doe"))
    assert result.is_valid


def test_validation_appends_to_existing_result():
    existing = ValidationResult()
    existing.add_error("login", "earlier problem")

    result = UserValidator().validate_login(UserInfoDto(login=""), existing)

    assert result is existing
    assert result.errors["login"] == ["earlier problem", LOGIN_MESSAGE]

