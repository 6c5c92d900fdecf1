"""Custom exceptions for donor identity operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field-scoped violation."""

    field: str
    message: str


class ValidationError(ValueError):
    """Raised when donor input fails one or more field rules.

    Carries every violation found; ``field`` and ``message`` refer to the
    first one.
    """

    def __init__(self, errors: list[FieldError]):
        if not errors:
            raise ValueError("ValidationError requires at least one FieldError")
        self.errors = list(errors)
        super().__init__("; ".join(error.message for error in self.errors))

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Build an error carrying a single violation."""
        return cls([FieldError(field=field, message=message)])

    @property
    def field(self) -> str:
        return self.errors[0].field

    @property
    def message(self) -> str:
        return self.errors[0].message

    @property
    def fields(self) -> list[str]:
        return [error.field for error in self.errors]

    def as_dict(self) -> dict[str, list[str]]:
        """Group messages by field name."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped


class UniquenessConflictError(ValidationError):
    """Raised when a unique field is already used by another donor."""

    @classmethod
    def for_fields(cls, fields: list[str]) -> "UniquenessConflictError":
        return cls(
            [
                FieldError(field=field, message=f"The {field} field is already in use.")
                for field in fields
            ]
        )


class CredentialError(ValidationError):
    """Raised when a password is missing or empty."""

    def __init__(self, message: str = "The Password field is required."):
        super().__init__([FieldError(field="password", message=message)])


class InvalidStatusTransitionError(ValidationError):
    """Raised when a status change is not allowed by the donor lifecycle."""

    def __init__(self, current: str, target: str):
        super().__init__(
            [
                FieldError(
                    field="status",
                    message=f"Cannot change status from '{current}' to '{target}'.",
                )
            ]
        )


class InvalidCredentialsError(ValueError):
    """Raised when email or password is incorrect."""

    def __init__(self):
        super().__init__("Incorrect email or password")


class AccountDeletedError(ValueError):
    """Raised when a deleted donor tries to authenticate."""

    def __init__(self):
        super().__init__("Account has been deleted")


class DonorNotFoundError(ValueError):
    """Raised when no donor matches the requested identifier."""

    def __init__(self, donor_id: object):
        self.donor_id = donor_id
        super().__init__(f"Donor '{donor_id}' not found")


class InvalidTokenError(ValueError):
    """Raised when a donor token cannot be validated."""

    def __init__(self, reason: str = "Could not validate credentials"):
        super().__init__(reason)
