"""Внешние коллабораторы ядра.

Ядро не владеет внешними балансами покупателей: проверка достаточности
средств инжектируется через FundsOracle. InMemoryWallets — простая
dict-реализация для симуляций и тестов.
"""

from typing import Dict, Optional, Protocol, runtime_checkable

from src.core.domain.units import validate_amount, validate_identity


@runtime_checkable
class FundsOracle(Protocol):
    """Проверка: хватает ли у identity внешних средств на amount."""

    def has_sufficient_funds(self, identity: str, amount: int) -> bool:
        ...


class InMemoryWallets:
    """Внешние кошельки в памяти.

    collect() вызывается леджером после успешной покупки и списывает
    премию с кошелька покупателя.
    """

    def __init__(self, balances: Optional[Dict[str, int]] = None):
        self._balances: Dict[str, int] = {}
        for identity, amount in (balances or {}).items():
            self.deposit(identity, amount)

    def deposit(self, identity: str, amount: int) -> None:
        validate_identity(identity)
        validate_amount(amount)
        self._balances[identity] = self._balances.get(identity, 0) + amount

    def balance_of(self, identity: str) -> int:
        return self._balances.get(identity, 0)

    def has_sufficient_funds(self, identity: str, amount: int) -> bool:
        return self.balance_of(identity) >= amount

    def collect(self, identity: str, amount: int) -> None:
        """
        Списание премии с кошелька.

        Raises:
            ValueError: Если средств недостаточно (has_sufficient_funds не вызван)
        """
        validate_amount(amount)
        balance = self.balance_of(identity)
        if balance < amount:
            raise ValueError(f"wallet {identity} balance {balance} < {amount}")
        self._balances[identity] = balance - amount
