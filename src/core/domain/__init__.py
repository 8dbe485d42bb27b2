"""
Domain models and value objects.

Contains fundamental domain entities like Policy, ConfigParams, LedgerState
and the Result/ErrorCode contract shared by all ledger operations.
"""

from src.core.domain.config_params import ConfigParams
from src.core.domain.ledger_state import LedgerState, PolicyWindows
from src.core.domain.policy import Policy
from src.core.domain.result import Err, ErrorCode, InvariantViolation, Ok, Result
from src.core.domain.units import (
    CLAIM_WAITING_PERIOD,
    DEFAULT_CLAIM_AMOUNT,
    DEFAULT_INSURANCE_FEE,
    POLICY_DURATION,
    validate_amount,
    validate_height,
    validate_identity,
)

__all__ = [
    # Units module
    "POLICY_DURATION",
    "CLAIM_WAITING_PERIOD",
    "DEFAULT_INSURANCE_FEE",
    "DEFAULT_CLAIM_AMOUNT",
    "validate_amount",
    "validate_height",
    "validate_identity",
    # Result contract
    "Ok",
    "Err",
    "Result",
    "ErrorCode",
    "InvariantViolation",
    # Models
    "Policy",
    "ConfigParams",
    "LedgerState",
    "PolicyWindows",
]
