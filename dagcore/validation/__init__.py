"""
Validation Module

Structural validation of pipeline graphs.
"""

from .validator import DAGValidator, ValidationResult, validate

__all__ = [
    "DAGValidator",
    "ValidationResult",
    "validate",
]
