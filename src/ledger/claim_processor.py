"""ClaimProcessor — подача claim по полису.

Порядок проверок фиксирован:
1. Полис отсутствует или истёк → POLICY_EXPIRED_OR_MISSING (2).
   Проверяется строго первым: истёкший полис никогда не отвечает
   "ещё рано", даже если по нему уже был claim.
2. Не прошла выдержка claim_waiting_period → CLAIM_NOT_ELIGIBLE (1).
3. Claim уже был → CLAIM_NOT_ELIGIBLE (1).
4. Казна не покрывает claim_amount → INSUFFICIENT_TREASURY, без эффектов.
5. mark_claimed + debit → Ok(True).
"""

from dataclasses import dataclass
from typing import Callable, Optional

from src.core.domain.result import Err, ErrorCode, InvariantViolation, Ok, Result
from src.core.domain.units import validate_height

from .policy_registry import PolicyRegistry
from .treasury import TreasuryLedger


@dataclass(frozen=True)
class ClaimEvaluation:
    """Результат предварительной оценки claim (без мутаций)."""

    eligible: bool
    error: Optional[Err]

    # Диагностика
    blocks_since_start: Optional[int]
    payout: int


class ClaimProcessor:
    """Проверка окна и дубликатов, затем выплата из казны.

    claim_amount читается через callable при каждой подаче: владелец
    может изменить его между вызовами.
    """

    def __init__(
        self,
        registry: PolicyRegistry,
        treasury: TreasuryLedger,
        claim_amount_source: Callable[[], int],
    ):
        self.registry = registry
        self.treasury = treasury
        self._claim_amount_source = claim_amount_source

    def evaluate(self, holder: str, at_height: int) -> ClaimEvaluation:
        """Проверки 1-4 без изменения состояния."""
        validate_height(at_height, "at_height")
        payout = self._claim_amount_source()

        if not self.registry.is_valid(holder, at_height):
            return ClaimEvaluation(
                eligible=False,
                error=Err(
                    ErrorCode.POLICY_EXPIRED_OR_MISSING,
                    reason=f"no valid policy for {holder} at height {at_height}",
                ),
                blocks_since_start=None,
                payout=payout,
            )

        policy = self.registry.get(holder)
        elapsed = policy.blocks_since_start(at_height)
        waiting_period = self.registry.config.claim_waiting_period

        if elapsed < waiting_period:
            return ClaimEvaluation(
                eligible=False,
                error=Err(
                    ErrorCode.CLAIM_NOT_ELIGIBLE,
                    reason=f"waiting period not passed: {elapsed} < {waiting_period}",
                ),
                blocks_since_start=elapsed,
                payout=payout,
            )

        if policy.claimed:
            return ClaimEvaluation(
                eligible=False,
                error=Err(ErrorCode.CLAIM_NOT_ELIGIBLE, reason="claim already filed"),
                blocks_since_start=elapsed,
                payout=payout,
            )

        if not self.treasury.can_cover(payout):
            return ClaimEvaluation(
                eligible=False,
                error=Err(
                    ErrorCode.INSUFFICIENT_TREASURY,
                    reason=f"treasury balance {self.treasury.balance} < payout {payout}",
                ),
                blocks_since_start=elapsed,
                payout=payout,
            )

        return ClaimEvaluation(
            eligible=True, error=None, blocks_since_start=elapsed, payout=payout
        )

    def file_claim(self, holder: str, at_height: int) -> Result:
        """
        Подача claim.

        Returns:
            Ok(True) — claim принят и выплачен; иначе Err с кодом 1, 2 или
            INSUFFICIENT_TREASURY. При отказе состояние не меняется.
        """
        evaluation = self.evaluate(holder, at_height)
        if not evaluation.eligible:
            return evaluation.error

        self.registry.mark_claimed(holder)
        debit = self.treasury.debit(evaluation.payout)
        if not debit.is_ok:
            # can_cover проверен выше; сюда попасть невозможно
            raise InvariantViolation(f"payout debit failed after coverage check: {debit.reason}")
        return Ok(True)
