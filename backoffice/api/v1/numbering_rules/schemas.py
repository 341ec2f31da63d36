"""API schemas for numbering rule endpoints."""

from datetime import datetime

from pydantic import BaseModel, field_serializer

from backoffice.models.numbering_rule import NumberingRule
from backoffice.services.numbering.rule_service import Pagination
from backoffice.utils.datetime_utils import to_api_timezone

# =============================================================================
# Response Schemas
# =============================================================================


class NumberingRuleResponse(BaseModel):
    """Numbering rule response schema."""

    id: str
    code: str
    name: str
    prefix: str
    date_format: str | None
    sequence_length: int
    current_sequence: int
    reset_period: str | None
    last_reset_at: datetime | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_timestamps(self, dt: datetime) -> str:
        """Serialize datetime to API timezone."""
        localized_dt = to_api_timezone(dt)
        assert localized_dt is not None
        return localized_dt.isoformat()

    @field_serializer("last_reset_at")
    def serialize_last_reset_at(self, dt: datetime | None) -> str | None:
        """Serialize optional datetime to API timezone."""
        localized_dt = to_api_timezone(dt)
        return localized_dt.isoformat() if localized_dt else None

    @classmethod
    def from_model(cls, rule: NumberingRule) -> "NumberingRuleResponse":
        """Create response from NumberingRule model."""
        return cls(
            id=rule.id,
            code=rule.code,
            name=rule.name,
            prefix=rule.prefix,
            date_format=rule.date_format,
            sequence_length=rule.sequence_length,
            current_sequence=rule.current_sequence,
            reset_period=rule.reset_period,
            last_reset_at=rule.last_reset_at,
            is_active=rule.is_active,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
        )


class PaginationResponse(BaseModel):
    """Page metadata."""

    total: int
    page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_pagination(cls, pagination: Pagination) -> "PaginationResponse":
        return cls(
            total=pagination.total,
            page=pagination.page,
            page_size=pagination.page_size,
            total_pages=pagination.total_pages,
            has_next_page=pagination.has_next_page,
            has_prev_page=pagination.has_prev_page,
        )


class NumberingRuleListResponse(BaseModel):
    """Paginated numbering rule list."""

    data: list[NumberingRuleResponse]
    pagination: PaginationResponse


class GeneratedNumberResponse(BaseModel):
    """A generated (or previewed) document number."""

    code: str
    number: str


class StatusResponse(BaseModel):
    """Generic status response."""

    status: str
    message: str
