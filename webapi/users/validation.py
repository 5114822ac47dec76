import unicodedata
from typing import Dict, List

from webapi.users.schemas import UserInfoDto

LOGIN_FIELD = "login"
FIRST_NAME_FIELD = "firstName"
LAST_NAME_FIELD = "lastName"

LOGIN_MESSAGE = "Login should contain only letters or digits"
FIRST_NAME_MESSAGE = "First name not set"
LAST_NAME_MESSAGE = "Last name not set"


class ValidationResult:
    """Accumulates keyed error messages; valid when nothing was added."""

    def __init__(self):
        self.errors: Dict[str, List[str]] = {}

    def add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    @property
    def is_valid(self) -> bool:
        return not self.errors


ASCII_DIGITS = "0123456789"


def is_letter_or_digit(ch: str) -> bool:
    """Any Unicode letter, but only ASCII digits."""
    return unicodedata.category(ch).startswith("L") or ch in ASCII_DIGITS


def is_valid_login(login) -> bool:
    return bool(login) and isinstance(login, str) and all(is_letter_or_digit(ch) for ch in login)


class UserValidator:
    """
    Field rules for submitted users.

    Every rule runs; failures are collected rather than stopping at the
    first one.
    """

    def validate_login(self, user: UserInfoDto, result: ValidationResult | None = None) -> ValidationResult:
        result = result if result is not None else ValidationResult()
        if not is_valid_login(user.login):
            result.add_error(LOGIN_FIELD, LOGIN_MESSAGE)
        return result

    def validate_full(self, user: UserInfoDto, result: ValidationResult | None = None) -> ValidationResult:
        """Login plus required first and last names (update and patch paths)."""
        result = self.validate_login(user, result)
        if not user.first_name:
            result.add_error(FIRST_NAME_FIELD, FIRST_NAME_MESSAGE)
        if not user.last_name:
            result.add_error(LAST_NAME_FIELD, LAST_NAME_MESSAGE)
        return result
