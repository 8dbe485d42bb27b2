"""
Units — Единицы и константы страхового леджера

Amount (сумма) и Height (логическая высота) — неотрицательные целые числа.
Float для денег запрещён: все суммы в минимальных единицах.

Константы времени жизни полиса:
- POLICY_DURATION: горизонт действия полиса в единицах высоты
- CLAIM_WAITING_PERIOD: минимальная выдержка от start_height до подачи claim
"""

from typing import Final


# =============================================================================
# ВРЕМЕННЫЕ ОКНА (в единицах height)
# =============================================================================

# ~1 год при одном блоке в 10 минут
POLICY_DURATION: Final[int] = 52_560

# ~1 сутки при одном блоке в 10 минут
CLAIM_WAITING_PERIOD: Final[int] = 144


# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ (деплой)
# =============================================================================

DEFAULT_INSURANCE_FEE: Final[int] = 1_000

DEFAULT_CLAIM_AMOUNT: Final[int] = 800


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def _require_int(value: object, name: str) -> int:
    # bool является подклассом int, но суммой не является
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    return value


def validate_amount(value: int, name: str = "amount") -> int:
    """
    Проверка суммы (Amount).

    Args:
        value: Сумма в минимальных единицах
        name: Имя параметра для сообщения об ошибке

    Returns:
        Исходное значение

    Raises:
        ValueError: Если сумма не целая или отрицательная
    """
    _require_int(value, name)
    if value < 0:
        raise ValueError(f"{name} cannot be negative: {value}")
    return value


def validate_height(value: int, name: str = "height") -> int:
    """
    Проверка логической высоты (Height).

    Raises:
        ValueError: Если высота не целая или отрицательная
    """
    _require_int(value, name)
    if value < 0:
        raise ValueError(f"{name} cannot be negative: {value}")
    return value


def validate_identity(value: str, name: str = "identity") -> str:
    """Identity — непустая непрозрачная строка (адрес)."""
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string, got {value!r}")
    return value
