"""
Policy — Модель страхового полиса

Immutable Pydantic модель, одна запись на держателя (holder).
Полная совместимость с JSON Schema (src/core/contracts/schema/policy.json).

Жизненный цикл:
- создаётся только успешной покупкой (buy_insurance)
- изменяется только подачей claim (claimed=False → True, новый экземпляр)
- никогда не удаляется; истечение вычисляется, а не хранится
"""

from pydantic import BaseModel, Field

from .units import CLAIM_WAITING_PERIOD, POLICY_DURATION


class Policy(BaseModel):
    """
    Модель полиса.

    Окно действия: [start_height, start_height + policy_duration).
    Claim допустим не раньше start_height + claim_waiting_period.
    """

    holder: str = Field(..., min_length=1, description="Identity держателя полиса")
    start_height: int = Field(..., ge=0, description="Высота покупки полиса")
    premium_paid: int = Field(..., ge=0, description="Уплаченная премия")
    claimed: bool = Field(default=False, description="Claim по полису уже выплачен")

    model_config = {"frozen": True}  # Immutable

    def expiry_height(self, policy_duration: int = POLICY_DURATION) -> int:
        """Первая высота, на которой полис уже недействителен."""
        return self.start_height + policy_duration

    def is_active_at(self, at_height: int, policy_duration: int = POLICY_DURATION) -> bool:
        """
        Проверка окна действия полиса.

        Статус claimed не учитывается: истёкший полис недействителен
        независимо от того, был ли по нему claim.
        """
        return self.start_height <= at_height < self.expiry_height(policy_duration)

    def blocks_since_start(self, at_height: int) -> int:
        return at_height - self.start_height

    def is_past_waiting_period(
        self, at_height: int, claim_waiting_period: int = CLAIM_WAITING_PERIOD
    ) -> bool:
        return self.blocks_since_start(at_height) >= claim_waiting_period

    def mark_claimed(self) -> "Policy":
        """Новый экземпляр с claimed=True."""
        return self.model_copy(update={"claimed": True})
