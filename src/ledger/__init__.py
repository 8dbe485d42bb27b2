"""Insurance ledger — ядро: полисы, claims, казна и owner-gated администрирование.

- PolicyRegistry: выдача полисов и проверка окна действия
- ClaimProcessor: окно ожидания claim и защита от повторной выплаты
- TreasuryLedger: пул средств, инвариант balance >= 0
- ConfigStore + AccessControl: параметры и авторизация владельца
- InsuranceLedger: атомарные публичные операции
"""

from .access_control import AccessControl
from .claim_processor import ClaimEvaluation, ClaimProcessor
from .config import LedgerConfig
from .config_store import ConfigStore
from .environment import FundsOracle, InMemoryWallets
from .insurance_ledger import InsuranceLedger
from .policy_registry import PolicyRegistry
from .treasury import TreasuryLedger

__all__ = [
    "AccessControl",
    "ClaimEvaluation",
    "ClaimProcessor",
    "ConfigStore",
    "FundsOracle",
    "InMemoryWallets",
    "InsuranceLedger",
    "LedgerConfig",
    "PolicyRegistry",
    "TreasuryLedger",
]
