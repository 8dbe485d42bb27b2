"""Конфигурация леджера: временные окна и параметры деплоя по умолчанию."""

from dataclasses import dataclass

from src.core.domain.ledger_state import PolicyWindows
from src.core.domain.units import (
    CLAIM_WAITING_PERIOD,
    DEFAULT_CLAIM_AMOUNT,
    DEFAULT_INSURANCE_FEE,
    POLICY_DURATION,
)


@dataclass(frozen=True)
class LedgerConfig:
    """Конфигурация временных окон полиса.

    - policy_duration: горизонт действия полиса (heights)
    - claim_waiting_period: выдержка до первой допустимой подачи claim (heights)
    - default_insurance_fee / default_claim_amount: параметры при деплое,
      если владелец не передал свои
    """
    policy_duration: int = POLICY_DURATION
    claim_waiting_period: int = CLAIM_WAITING_PERIOD
    default_insurance_fee: int = DEFAULT_INSURANCE_FEE
    default_claim_amount: int = DEFAULT_CLAIM_AMOUNT

    def __post_init__(self):
        if self.policy_duration <= 0:
            raise ValueError(f"policy_duration must be positive, got {self.policy_duration}")
        if self.claim_waiting_period < 0:
            raise ValueError(
                f"claim_waiting_period cannot be negative, got {self.claim_waiting_period}"
            )
        if self.claim_waiting_period >= self.policy_duration:
            raise ValueError(
                "claim_waiting_period must be shorter than policy_duration, "
                f"got {self.claim_waiting_period} >= {self.policy_duration}"
            )

    def windows(self) -> PolicyWindows:
        return PolicyWindows(
            policy_duration=self.policy_duration,
            claim_waiting_period=self.claim_waiting_period,
        )

    @classmethod
    def from_windows(cls, windows: PolicyWindows) -> "LedgerConfig":
        """Конфигурация с окнами из снапшота и параметрами деплоя по умолчанию."""
        return cls(
            policy_duration=windows.policy_duration,
            claim_waiting_period=windows.claim_waiting_period,
        )
