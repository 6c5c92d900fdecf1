"""Field rules and normalization for donor input.

Validation runs in two phases. ``normalize_fields`` applies the rule table
without any I/O and reports every violation at once. ``check_uniqueness``
then asks the repository whether the unique fields are already taken.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from app.features.donors.errors import (
    FieldError,
    UniquenessConflictError,
    ValidationError,
)
from app.features.donors.models import Donor
from app.features.donors.repositories.protocols import DonorRepository
from app.features.donors.schemas import (
    BLOOD_TYPES,
    DEFAULT_GENDER,
    LEGACY_STATUS_ALIASES,
    DonorStatus,
)

CURP_PATTERN = re.compile(
    r"[A-Z]{4}\d{2}(?:0[1-9]|1[0-2])(?:0[1-9]|[12]\d|3[01])[HM]"
    r"(?:AS|B[CS]|C[CLMSH]|D[FG]|G[TR]|HG|JC|M[CNS]|N[ETL]|OC|PL|Q[TR]|S[PLR]|T[CSL]|VZ|YN|ZS)"
    r"[B-DF-HJ-NP-TV-Z]{3}[A-Z\d]\d"
)
# Syntactic only: 2023-02-30 passes.
DATE_OF_BIRTH_PATTERN = re.compile(
    r"(?:19|20)\d{2}-(?:1[0-2]|0?[1-9])-(?:0?[1-9]|[12]\d|3[01])"
)
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_NUMBER_PATTERN = re.compile(r"\d{10}")
BLOOD_TYPE_PATTERN = re.compile(r"(?:A|B|AB|O)[+-]")

STATUS_CHOICES: dict[str, DonorStatus] = {
    **{status.value: status for status in DonorStatus},
    **LEGACY_STATUS_ALIASES,
}


@dataclass(frozen=True)
class FieldRule:
    """How a single input field is normalized and checked."""

    name: str
    label: str
    required: bool = False
    trim: bool = True
    case: str | None = None
    pattern: re.Pattern[str] | None = None
    pattern_message: str | None = None
    choices: Mapping[str, Any] | None = None
    choices_message: str | None = None
    default: Any = None
    mapping: bool = False
    required_message: str | None = None

    def _fail(self, message: str) -> ValidationError:
        return ValidationError.for_field(self.name, message)

    @property
    def missing_message(self) -> str:
        return self.required_message or f"The {self.label} field is required."

    def apply(self, value: Any) -> Any:
        """Return the normalized value or raise ``ValidationError``."""
        if self.mapping:
            return self._apply_mapping(value)

        if value is not None and not isinstance(value, str):
            if isinstance(value, int) and not isinstance(value, bool):
                value = str(value)
            else:
                raise self._fail(f"The {self.label} field must be text.")

        if value is not None:
            if self.trim:
                value = value.strip()
            if self.case == "upper":
                value = value.upper()
            elif self.case == "lower":
                value = value.lower()

        if value is None or value == "":
            if self.required:
                raise self._fail(self.missing_message)
            return self.default

        if self.pattern is not None and not self.pattern.fullmatch(value):
            raise self._fail(
                self.pattern_message or f"The {self.label} field is not valid."
            )

        if self.choices is not None:
            if value not in self.choices:
                raise self._fail(
                    self.choices_message
                    or f"The {self.label} field has an unsupported value."
                )
            return self.choices[value]

        return value

    def _apply_mapping(self, value: Any) -> dict[str, Any] | None:
        if value is None or (isinstance(value, Mapping) and not value):
            if self.required:
                raise self._fail(self.missing_message)
            return self.default
        if not isinstance(value, Mapping):
            raise self._fail(f"The {self.label} must be an object.")
        return dict(value)


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        name="curp",
        label="CURP",
        required=True,
        case="upper",
        pattern=CURP_PATTERN,
        pattern_message="The CURP field does not have a valid format.",
    ),
    FieldRule(name="first_name", label="First name(s)", required=True),
    FieldRule(name="last_name", label="Last name", required=True),
    FieldRule(
        name="date_of_birth",
        label="Date of birth",
        required=True,
        pattern=DATE_OF_BIRTH_PATTERN,
        pattern_message="The Date of birth field must use the format YYYY-MM-DD.",
    ),
    FieldRule(name="gender", label="Gender", default=DEFAULT_GENDER),
    FieldRule(
        name="email",
        label="Email",
        required=True,
        case="lower",
        pattern=EMAIL_PATTERN,
        pattern_message="The Email field does not have a valid format.",
    ),
    FieldRule(
        name="phone_number",
        label="Phone number",
        pattern=PHONE_NUMBER_PATTERN,
        pattern_message="The Phone number field must have 10 digits.",
    ),
    FieldRule(name="place_of_residence", label="Place of residence", trim=False),
    FieldRule(name="clave_hospital", label="Hospital code", trim=False),
    FieldRule(
        name="blood_type",
        label="Blood type",
        required=True,
        case="upper",
        pattern=BLOOD_TYPE_PATTERN,
        pattern_message="The blood type is not valid.",
        choices={blood_type: blood_type for blood_type in BLOOD_TYPES},
        choices_message="The blood type is not valid.",
    ),
    FieldRule(name="certified_file", label="Certified file", required=True),
    FieldRule(
        name="form_answers",
        label="Form",
        required=True,
        mapping=True,
        required_message="The Form is required.",
    ),
    FieldRule(
        name="status",
        label="status",
        required=True,
        case="lower",
        choices=STATUS_CHOICES,
        choices_message="The status field must be one of: active, inactive, deleted.",
        required_message="The status field is not set.",
    ),
)

RULES_BY_NAME: dict[str, FieldRule] = {rule.name: rule for rule in FIELD_RULES}


def normalize_fields(raw: Mapping[str, Any], partial: bool = False) -> dict[str, Any]:
    """Normalize raw donor input against ``FIELD_RULES``.

    Args:
        raw: Incoming field values. Keys without a rule are ignored.
        partial: Only check the keys present in ``raw`` (profile updates).

    Returns:
        Normalized values keyed by field name.

    Raises:
        ValidationError: With one ``FieldError`` per violated field.
    """
    normalized: dict[str, Any] = {}
    errors: list[FieldError] = []

    for rule in FIELD_RULES:
        if partial and rule.name not in raw:
            continue
        try:
            normalized[rule.name] = rule.apply(raw.get(rule.name))
        except ValidationError as e:
            errors.extend(e.errors)

    if errors:
        raise ValidationError(errors)

    return normalized


def validate_and_normalize(raw: Mapping[str, Any]) -> Donor:
    """Build an unsaved ``Donor`` from raw registration input."""
    return Donor(**normalize_fields(raw))


def normalize_email(email: str) -> str:
    """Apply the email rule's normalization without the format check."""
    return email.strip().lower()


async def check_uniqueness(
    fields: Mapping[str, Any],
    repository: DonorRepository,
    exclude_id: UUID | None = None,
) -> None:
    """Reject values of unique fields already held by another donor.

    Args:
        fields: Normalized field values; only ``curp`` and ``email`` are checked.
        repository: Store used for the lookups.
        exclude_id: Donor allowed to keep its own values (updates).

    Raises:
        UniquenessConflictError: Listing every conflicting field.
    """
    lookups = {
        "curp": repository.get_by_curp,
        "email": repository.get_by_email,
    }
    conflicts: list[str] = []

    for field, lookup in lookups.items():
        value = fields.get(field)
        if value is None:
            continue
        existing = await lookup(value)
        if existing is not None and existing.id != exclude_id:
            conflicts.append(field)

    if conflicts:
        raise UniquenessConflictError.for_fields(conflicts)
