"""Validation schemas for numbering rule payloads."""

from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from backoffice.models.enums import ResetPeriod

RuleCodeStr = Annotated[str, Field(min_length=1, max_length=30, pattern=r"^[A-Z0-9_]+$")]
RuleNameStr = Annotated[str, Field(min_length=1, max_length=100)]
PrefixStr = Annotated[str, Field(min_length=1, max_length=10, pattern=r"^[A-Z0-9-]+$")]
SequenceLengthInt = Annotated[int, Field(ge=1, le=10, strict=True)]
DateFormatStr = Annotated[str, Field(max_length=20)]


class NumberingRuleUpdate(BaseModel):
    """Editable numbering rule fields. Code and counter state are not editable."""

    name: RuleNameStr
    prefix: PrefixStr
    date_format: DateFormatStr | None = None
    sequence_length: SequenceLengthInt
    reset_period: ResetPeriod | None = None
    is_active: bool

    @field_validator("date_format", "reset_period", mode="before")
    @classmethod
    def empty_to_none(cls, v: object) -> object:
        """Empty strings mean "not set"."""
        if v == "":
            return None
        return v


class NumberingRuleCreate(NumberingRuleUpdate):
    """Payload for a new numbering rule."""

    code: RuleCodeStr
