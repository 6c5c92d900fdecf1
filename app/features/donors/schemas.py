import enum

DONOR_ROLE = "donor-user"

DEFAULT_GENDER = "Prefer not to say."


class DonorStatus(str, enum.Enum):
    """Lifecycle states of a donor record."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


# Values stored by earlier deployments of the donor registry.
LEGACY_STATUS_ALIASES: dict[str, DonorStatus] = {
    "activo": DonorStatus.ACTIVE,
    "inactivo": DonorStatus.INACTIVE,
    "eliminado": DonorStatus.DELETED,
}

BLOOD_TYPES = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")


class DonorView(enum.Enum):
    """Which projection of a donor a caller is entitled to."""

    PUBLIC = "public"
    FULL = "full"
