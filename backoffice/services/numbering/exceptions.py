"""Numbering domain exceptions."""

from backoffice.services.exceptions import NotFoundError, ServiceError, ValidationError


class RuleNotFound(NotFoundError):
    """No numbering rule matches the requested code (or id)."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Numbering rule {code} does not exist")


class RuleDisabled(ValidationError):
    """Numbering rule exists but is not active."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Numbering rule {code} is disabled")


class RuleCodeExists(ValidationError):
    """Another numbering rule already uses this code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Numbering rule {code} already exists")


class PersistenceFailure(ServiceError):
    """The counter update could not be committed; nothing was issued."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Could not persist next number for rule {code}")
