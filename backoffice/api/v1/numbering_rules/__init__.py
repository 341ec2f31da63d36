"""Numbering rules API package.

- routes: rule administration (list, get, create, update, delete, reset) and
  number generation / preview by rule code
"""

from backoffice.api.v1.numbering_rules.routes import router

__all__ = ["router"]
