"""
Contract Validation Module

Модуль для валидации JSON контрактов datemath.
"""

from .validators import (
    ContractValidator,
    OperationValidator,
    ResolveRequestValidator,
    SchemaLoader,
    validate_operation,
    validate_resolve_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ResolveRequestValidator",
    "OperationValidator",
    # Functions
    "validate_resolve_request",
    "validate_operation",
]
