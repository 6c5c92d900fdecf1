"""Database models for donor identities."""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, String, Text, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.postgres.session import Base
from app.features.donors.schemas import DEFAULT_GENDER, DonorStatus

CURP_UNIQUE_CONSTRAINT = "donors_curp_key"
EMAIL_UNIQUE_INDEX = "ix_donors_email"


class Donor(Base):
    """Donor identity and credential record.

    Free-text fields and the secret columns are unbounded; only fields whose
    format pins their length use sized columns.
    """

    __tablename__ = "donors"
    __table_args__ = (
        UniqueConstraint("curp", name=CURP_UNIQUE_CONSTRAINT),
        Index(EMAIL_UNIQUE_INDEX, "email", unique=True),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    curp: Mapped[str] = mapped_column(String(18), nullable=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    date_of_birth: Mapped[str] = mapped_column(String(10), nullable=False)
    gender: Mapped[str] = mapped_column(Text, nullable=False, default=DEFAULT_GENDER)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(10), nullable=True)
    place_of_residence: Mapped[str | None] = mapped_column(Text, nullable=True)
    clave_hospital: Mapped[str | None] = mapped_column(Text, nullable=True)
    blood_type: Mapped[str] = mapped_column(String(3), nullable=False, index=True)
    certified_file: Mapped[str] = mapped_column(Text, nullable=False)
    form_answers: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False
    )
    status: Mapped[DonorStatus] = mapped_column(
        SAEnum(
            DonorStatus,
            name="donor_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=DonorStatus.ACTIVE,
    )

    # Both set by CredentialManager.set_secret, never one without the other.
    # Their length follows the configured salt size and key length.
    secret_hash: Mapped[str | None] = mapped_column(Text, nullable=True)
    secret_salt: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    @property
    def has_secret(self) -> bool:
        """Whether a password has been established for this donor."""
        return bool(self.secret_hash and self.secret_salt)
