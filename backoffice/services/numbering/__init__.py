"""Numbering rules and document number generation.

- generator: NumberingService.generate / preview_next_number
- rule_service: NumberingRuleService (rule administration)
- formatting: reset decision, date segment and padding helpers
- codes: well-known rule codes used by document-creating flows
"""

from backoffice.services.numbering.codes import NumberingRuleCode
from backoffice.services.numbering.exceptions import (
    PersistenceFailure,
    RuleCodeExists,
    RuleDisabled,
    RuleNotFound,
)
from backoffice.services.numbering.generator import NumberingService
from backoffice.services.numbering.rule_service import NumberingRuleService, Pagination

__all__ = [
    "NumberingRuleCode",
    "NumberingRuleService",
    "NumberingService",
    "Pagination",
    "PersistenceFailure",
    "RuleCodeExists",
    "RuleDisabled",
    "RuleNotFound",
]
