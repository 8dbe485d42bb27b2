"""PolicyRegistry — таблица полисов holder → Policy.

Выдаёт полисы при покупке, отвечает на запросы валидности и статуса claim.
Движения средств здесь нет: только мутация таблицы.
"""

from typing import Dict, Iterator, Optional

from src.core.domain.policy import Policy
from src.core.domain.result import InvariantViolation
from src.core.domain.units import validate_amount, validate_height, validate_identity

from .config import LedgerConfig


class PolicyRegistry:
    """Таблица полисов, не более одной записи на holder.

    Записи не удаляются: истёкший полис остаётся в таблице, пока его
    не перезапишет новая покупка.
    """

    def __init__(self, config: Optional[LedgerConfig] = None):
        self.config = config or LedgerConfig()
        self._policies: Dict[str, Policy] = {}

    def __len__(self) -> int:
        return len(self._policies)

    def __contains__(self, holder: str) -> bool:
        return holder in self._policies

    def __iter__(self) -> Iterator[Policy]:
        return iter(self._policies.values())

    def get(self, holder: str) -> Optional[Policy]:
        return self._policies.get(holder)

    def issue_policy(self, holder: str, at_height: int, premium: int) -> Policy:
        """Выпуск полиса с claimed=False и start_height=at_height.

        Предыдущая запись holder перезаписывается безусловно; решение о
        допустимости повторной покупки принимается выше, в buy_insurance.
        """
        validate_identity(holder, "holder")
        validate_height(at_height, "at_height")
        validate_amount(premium, "premium")

        policy = Policy(holder=holder, start_height=at_height, premium_paid=premium)
        self._policies[holder] = policy
        return policy

    def is_valid(self, holder: str, at_height: int) -> bool:
        """True iff полис существует и at_height в [start, start + policy_duration)."""
        policy = self._policies.get(holder)
        if policy is None:
            return False
        return policy.is_active_at(at_height, self.config.policy_duration)

    def has_claimed(self, holder: str) -> bool:
        policy = self._policies.get(holder)
        return policy is not None and policy.claimed

    def has_active_unclaimed(self, holder: str, at_height: int) -> bool:
        return self.is_valid(holder, at_height) and not self.has_claimed(holder)

    def mark_claimed(self, holder: str) -> Policy:
        """Пометка полиса как оплаченного.

        Вызывающий (ClaimProcessor) гарантирует наличие неоплаченного полиса.

        Raises:
            InvariantViolation: Если полиса нет или claim уже был
        """
        policy = self._policies.get(holder)
        if policy is None:
            raise InvariantViolation(f"mark_claimed: no policy for holder {holder}")
        if policy.claimed:
            raise InvariantViolation(f"mark_claimed: policy of {holder} already claimed")

        claimed = policy.mark_claimed()
        self._policies[holder] = claimed
        return claimed

    def snapshot(self) -> Dict[str, Policy]:
        # Policy immutable: поверхностной копии достаточно
        return dict(self._policies)

    def restore(self, policies: Dict[str, Policy]) -> None:
        """Откат к ранее снятой таблице (используется атомарной секцией)."""
        self._policies = dict(policies)
