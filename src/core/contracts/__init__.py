"""
Contract Validation Module

Модуль для валидации JSON контрактов страхового леджера.
"""

from .validators import (
    ContractValidator,
    LedgerStateValidator,
    PolicyValidator,
    SchemaLoader,
    validate_ledger_state,
    validate_policy,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PolicyValidator",
    "LedgerStateValidator",
    # Functions
    "validate_policy",
    "validate_ledger_state",
]
