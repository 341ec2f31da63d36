"""NumberingRule database model."""

from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, Column, DateTime
from sqlmodel import Field, SQLModel
from ulid import ULID

from backoffice.models.types import ULIDType


def _utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def _ulid() -> str:
    """Generate a new ULID string."""
    return str(ULID())


class NumberingRule(SQLModel, table=True):
    """Numbering configuration for one document type (orders, purchase orders, shifts...).

    current_sequence and last_reset_at are mutated in place by every generated number.
    """

    __tablename__ = "numbering_rules"
    __table_args__ = (
        CheckConstraint("current_sequence >= 0", name="ck_numbering_rules_current_sequence_non_negative"),
    )

    id: str = Field(
        default_factory=_ulid,
        max_length=26,
        sa_column=Column(ULIDType, primary_key=True),
    )
    code: str = Field(unique=True, index=True, max_length=30)
    name: str = Field(max_length=100)
    prefix: str = Field(max_length=10)

    # Plain text, see DateFormat / ResetPeriod for the recognised values
    date_format: str | None = Field(default=None, max_length=20)
    reset_period: str | None = Field(default=None, max_length=20)

    sequence_length: int = 4  # Minimum width, longer counters are not truncated
    current_sequence: int = 0  # Last issued value
    last_reset_at: datetime | None = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    is_active: bool = True

    created_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
