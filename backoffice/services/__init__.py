"""Services module.

This module provides the service layer architecture:
- exceptions: Custom service exceptions
- numbering: Numbering rule administration and document number generation
"""
