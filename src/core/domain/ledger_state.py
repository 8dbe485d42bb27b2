"""
LedgerState — Снапшот состояния страхового леджера

Immutable Pydantic модель, представляющая полный снапшот:
- метаданные (schema_version, height последней применённой операции)
- административные параметры (config)
- временные окна полиса (windows)
- баланс казны (treasury_balance)
- таблица полисов (policies, отсортированы по holder)

Полная совместимость с JSON Schema (src/core/contracts/schema/ledger_state.json).
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .config_params import ConfigParams
from .policy import Policy
from .units import CLAIM_WAITING_PERIOD, POLICY_DURATION


class PolicyWindows(BaseModel):
    """Временные окна полиса, под которыми создавался снапшот."""

    policy_duration: int = Field(
        default=POLICY_DURATION, gt=0, description="Горизонт действия полиса"
    )
    claim_waiting_period: int = Field(
        default=CLAIM_WAITING_PERIOD, ge=0, description="Выдержка до подачи claim"
    )

    model_config = {"frozen": True}


class LedgerState(BaseModel):
    """Снапшот леджера для экспорта и восстановления."""

    schema_version: str = Field(
        default="1", pattern="^1$", description="Версия схемы для tracking совместимости"
    )
    height: Optional[int] = Field(
        None, ge=0, description="Высота последней мутирующей операции (nullable)"
    )
    config: ConfigParams = Field(..., description="Административные параметры")
    windows: PolicyWindows = Field(
        default_factory=PolicyWindows, description="Временные окна полиса"
    )
    treasury_balance: int = Field(..., ge=0, description="Баланс казны")
    policies: list[Policy] = Field(default_factory=list, description="Таблица полисов")

    model_config = {"frozen": True}

    @field_validator("policies")
    @classmethod
    def validate_unique_holders(cls, v: list[Policy]) -> list[Policy]:
        """Не более одного полиса на holder."""
        holders = [p.holder for p in v]
        if len(holders) != len(set(holders)):
            raise ValueError("policies contain duplicate holders")
        return v
