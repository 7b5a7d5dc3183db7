"""Account field validation.

Validates registration data before anything is written:
- Login handle: required, 4-20 characters, letters and digits only
- Password: required, 4-20 characters
- Email: required, syntactically valid address

Errors are reported in field order so callers can surface the first one.
"""

import re
from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

ACCOUNT_PATTERN = re.compile(r"[A-Za-z0-9]+")


@dataclass(frozen=True)
class AccountValidationError:
    """Represents an account validation error.

    Attributes:
        field: The field name.
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class AccountValidator:
    """Validates account registration fields."""

    def __init__(
        self,
        account_min_length: int = 4,
        account_max_length: int = 20,
        password_min_length: int = 4,
        password_max_length: int = 20,
    ) -> None:
        self.account_min_length = account_min_length
        self.account_max_length = account_max_length
        self.password_min_length = password_min_length
        self.password_max_length = password_max_length

    def validate(
        self, account: str | None, password: str | None, email: str | None
    ) -> list[AccountValidationError]:
        """Validate all registration fields.

        Returns:
            List of validation errors. Empty list if the data is valid.
        """
        return (
            self.validate_account(account)
            + self.validate_password(password)
            + self.validate_email(email)
        )

    def validate_account(self, account: str | None) -> list[AccountValidationError]:
        if not account:
            return [AccountValidationError("account", "Account is required", "account_required")]
        if not self.account_min_length <= len(account) <= self.account_max_length:
            return [
                AccountValidationError(
                    "account",
                    f"Account must be {self.account_min_length}-{self.account_max_length} characters",
                    "account_length",
                )
            ]
        if not ACCOUNT_PATTERN.fullmatch(account):
            return [
                AccountValidationError(
                    "account",
                    "Account may only contain letters and digits",
                    "account_format",
                )
            ]
        return []

    def validate_password(self, password: str | None) -> list[AccountValidationError]:
        if not password:
            return [AccountValidationError("password", "Password is required", "password_required")]
        if not self.password_min_length <= len(password) <= self.password_max_length:
            return [
                AccountValidationError(
                    "password",
                    f"Password must be {self.password_min_length}-{self.password_max_length} characters",
                    "password_length",
                )
            ]
        return []

    def validate_email(self, email: str | None) -> list[AccountValidationError]:
        if not email:
            return [AccountValidationError("email", "Email is required", "email_required")]
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            return [AccountValidationError("email", "Email format is invalid", "email_format")]
        return []


# Default validator instance
default_account_validator = AccountValidator()
