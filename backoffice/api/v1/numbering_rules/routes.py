"""Numbering rule API endpoints."""

import structlog
from fastapi import APIRouter, HTTPException, status

from backoffice.api.v1.numbering_rules.dependencies import NumberingRuleServiceDep, NumberingServiceDep
from backoffice.api.v1.numbering_rules.schemas import (
    GeneratedNumberResponse,
    NumberingRuleListResponse,
    NumberingRuleResponse,
    PaginationResponse,
    StatusResponse,
)
from backoffice.services.numbering.exceptions import (
    PersistenceFailure,
    RuleCodeExists,
    RuleDisabled,
    RuleNotFound,
)
from backoffice.services.numbering.schemas import NumberingRuleCreate, NumberingRuleUpdate

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["numbering-rules"])


# Code-addressed routes are registered first so "by-code" is never taken for a rule id


@router.get(
    "/numbering-rules/by-code/{code}",
    response_model=NumberingRuleResponse,
    operation_id="getNumberingRuleByCode",
)
async def get_numbering_rule_by_code(code: str, service: NumberingRuleServiceDep) -> NumberingRuleResponse:
    """Get a numbering rule by its code."""
    try:
        rule = await service.get_rule_by_code(code)
        return NumberingRuleResponse.from_model(rule)
    except RuleNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get(
    "/numbering-rules/by-code/{code}/preview",
    response_model=GeneratedNumberResponse,
    operation_id="previewNextNumber",
)
async def preview_next_number(code: str, service: NumberingServiceDep) -> GeneratedNumberResponse:
    """Preview the next number for a rule without consuming it.

    Advisory only: a concurrent generate can issue this number to someone else first.
    """
    try:
        number = await service.preview_next_number(code)
        return GeneratedNumberResponse(code=code, number=number)
    except RuleNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/numbering-rules/by-code/{code}/generate",
    response_model=GeneratedNumberResponse,
    operation_id="generateNextNumber",
)
async def generate_next_number(code: str, service: NumberingServiceDep) -> GeneratedNumberResponse:
    """Issue the next number for a rule."""
    try:
        number = await service.generate(code)
        return GeneratedNumberResponse(code=code, number=number)
    except RuleNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuleDisabled as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/numbering-rules", response_model=NumberingRuleListResponse, operation_id="listNumberingRules")
async def list_numbering_rules(
    service: NumberingRuleServiceDep,
    page: int = 1,
    page_size: int = 20,
    search: str | None = None,
    is_active: bool | None = None,
) -> NumberingRuleListResponse:
    """List numbering rules with pagination and optional search."""
    if page < 1 or page_size < 1:
        raise HTTPException(status_code=422, detail="page and page_size must be positive")

    rules, pagination = await service.list_rules(page=page, page_size=page_size, search=search, is_active=is_active)
    return NumberingRuleListResponse(
        data=[NumberingRuleResponse.from_model(rule) for rule in rules],
        pagination=PaginationResponse.from_pagination(pagination),
    )


@router.post(
    "/numbering-rules",
    response_model=NumberingRuleResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createNumberingRule",
)
async def create_numbering_rule(
    payload: NumberingRuleCreate,
    service: NumberingRuleServiceDep,
) -> NumberingRuleResponse:
    """Create a numbering rule."""
    try:
        rule = await service.create_rule(payload)
        return NumberingRuleResponse.from_model(rule)
    except RuleCodeExists as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/numbering-rules/{rule_id}", response_model=NumberingRuleResponse, operation_id="getNumberingRule")
async def get_numbering_rule(rule_id: str, service: NumberingRuleServiceDep) -> NumberingRuleResponse:
    """Get a single numbering rule."""
    try:
        rule = await service.get_rule(rule_id)
        return NumberingRuleResponse.from_model(rule)
    except RuleNotFound:
        raise HTTPException(status_code=404, detail="Numbering rule not found")


@router.put("/numbering-rules/{rule_id}", response_model=NumberingRuleResponse, operation_id="updateNumberingRule")
async def update_numbering_rule(
    rule_id: str,
    payload: NumberingRuleUpdate,
    service: NumberingRuleServiceDep,
) -> NumberingRuleResponse:
    """Update a numbering rule's settings."""
    try:
        rule = await service.update_rule(rule_id, payload)
        return NumberingRuleResponse.from_model(rule)
    except RuleNotFound:
        raise HTTPException(status_code=404, detail="Numbering rule not found")


@router.delete("/numbering-rules/{rule_id}", response_model=StatusResponse, operation_id="deleteNumberingRule")
async def delete_numbering_rule(rule_id: str, service: NumberingRuleServiceDep) -> StatusResponse:
    """Delete a numbering rule."""
    try:
        await service.delete_rule(rule_id)
    except RuleNotFound:
        raise HTTPException(status_code=404, detail="Numbering rule not found")

    return StatusResponse(status="deleted", message="Numbering rule deleted")


@router.post(
    "/numbering-rules/{rule_id}/reset",
    response_model=NumberingRuleResponse,
    operation_id="resetNumberingRuleSequence",
)
async def reset_numbering_rule_sequence(rule_id: str, service: NumberingRuleServiceDep) -> NumberingRuleResponse:
    """Reset a rule's counter so the next number starts at 1."""
    try:
        rule = await service.reset_sequence(rule_id)
    except RuleNotFound:
        raise HTTPException(status_code=404, detail="Numbering rule not found")

    logger.info("Numbering sequence reset via API", rule_code=rule.code)
    return NumberingRuleResponse.from_model(rule)
