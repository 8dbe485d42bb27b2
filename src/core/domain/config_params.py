"""
ConfigParams — Административные параметры леджера

Immutable Pydantic модель (process-wide singleton в рамках одного леджера).
Владелец (owner) фиксируется при деплое, fee и claim_amount меняются
только владельцем через ConfigStore; каждое изменение создаёт новый экземпляр.
"""

from pydantic import BaseModel, Field

from .units import DEFAULT_CLAIM_AMOUNT, DEFAULT_INSURANCE_FEE


class ConfigParams(BaseModel):
    """Параметры: owner, стоимость страховки, размер выплаты по claim."""

    owner: str = Field(..., min_length=1, description="Identity владельца контракта")
    insurance_fee: int = Field(
        default=DEFAULT_INSURANCE_FEE, ge=0, description="Премия за полис"
    )
    claim_amount: int = Field(
        default=DEFAULT_CLAIM_AMOUNT, ge=0, description="Фиксированная выплата по claim"
    )

    model_config = {"frozen": True}

    def with_insurance_fee(self, new_fee: int) -> "ConfigParams":
        return self.model_copy(update={"insurance_fee": new_fee})

    def with_claim_amount(self, new_amount: int) -> "ConfigParams":
        return self.model_copy(update={"claim_amount": new_amount})
