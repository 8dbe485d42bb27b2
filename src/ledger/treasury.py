"""TreasuryLedger — пул средств, обеспечивающий выплаты.

Пополняется премиями, расходуется на выплаты по claim и административный
вывод. Инвариант: balance >= 0 всегда; debit, нарушающий инвариант,
отклоняется без частичного эффекта.
"""

from src.core.domain.result import Err, ErrorCode, InvariantViolation, Ok, Result
from src.core.domain.units import validate_amount


class TreasuryLedger:
    """Баланс казны. Прямая мутация снаружи недоступна."""

    def __init__(self, initial_balance: int = 0):
        self._balance = validate_amount(initial_balance, "initial_balance")

    @property
    def balance(self) -> int:
        return self._balance

    def can_cover(self, amount: int) -> bool:
        return self._balance >= amount

    def credit(self, amount: int) -> None:
        """balance += amount. Отказов нет: amount неотрицателен по контракту."""
        validate_amount(amount)
        self._balance += amount

    def debit(self, amount: int) -> Result:
        """
        Списание из казны.

        Returns:
            Ok(True) либо Err(INSUFFICIENT_TREASURY), баланс не меняется
        """
        validate_amount(amount)
        if self._balance < amount:
            return Err(
                ErrorCode.INSUFFICIENT_TREASURY,
                reason=f"treasury balance {self._balance} < requested {amount}",
            )
        self._balance -= amount
        if self._balance < 0:
            raise InvariantViolation(f"treasury balance went negative: {self._balance}")
        return Ok(True)

    def restore(self, balance: int) -> None:
        """Откат к ранее снятому значению (используется атомарной секцией)."""
        self._balance = validate_amount(balance, "balance")
