"""
Result — Результат операции леджера и коды ошибок

Каждая публичная операция тотальна: возвращает Ok либо Err и никогда
не бросает исключение для легитимного отказа. Числовые коды ошибок —
часть внешнего контракта и не переиспользуются.

InvariantViolation — единственное исключение ядра: нарушение внутреннего
инварианта (ошибка программиста), в Result не конвертируется.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Union


# =============================================================================
# ERROR CODES
# =============================================================================


class ErrorCode(IntEnum):
    """
    Стабильные коды отказа.

    CLAIM_NOT_ELIGIBLE покрывает обе причины: ранняя подача и повторная подача.
    Разделение сломает совместимость с клиентами, которые ветвятся по коду 1.
    """

    INSUFFICIENT_FUNDS = 0
    CLAIM_NOT_ELIGIBLE = 1
    POLICY_EXPIRED_OR_MISSING = 2
    INSUFFICIENT_TREASURY = 3
    UNAUTHORIZED = 403
    EXCESS_WITHDRAWAL_DENIED = 406
    POLICY_ALREADY_ACTIVE = 409


class InvariantViolation(AssertionError):
    """Нарушен внутренний инвариант леджера."""


# =============================================================================
# RESULT TYPES
# =============================================================================


@dataclass(frozen=True)
class Ok:
    """Успешный результат."""

    value: Any = True

    @property
    def is_ok(self) -> bool:
        return True

    def to_legacy(self) -> Dict[str, Any]:
        """Исторический формат ответа: {"isOk": True, "value": <value>}."""
        return {"isOk": True, "value": self.value}


@dataclass(frozen=True)
class Err:
    """Отказ с кодом ошибки.

    reason — диагностика для логов, не является частью контракта.
    """

    code: ErrorCode
    reason: str = ""

    @property
    def is_ok(self) -> bool:
        return False

    def to_legacy(self) -> Dict[str, Any]:
        """Исторический формат ответа: {"isOk": False, "value": <code>}."""
        return {"isOk": False, "value": int(self.code)}


Result = Union[Ok, Err]
