"""ConfigStore — хранилище административных параметров (owner, fee, claim amount).

Запись разрешена только owner; проверка делегирована AccessControl.
Отказ в авторизации не меняет состояние.
"""

from src.core.domain.config_params import ConfigParams
from src.core.domain.result import Ok, Result
from src.core.domain.units import validate_amount
from src.core.log import get_logger

from .access_control import AccessControl

logger = get_logger(__name__)


class ConfigStore:
    """Административные параметры леджера."""

    def __init__(self, params: ConfigParams):
        self._params = params
        self.access_control = AccessControl(lambda: self._params.owner)

    @property
    def params(self) -> ConfigParams:
        return self._params

    @property
    def owner(self) -> str:
        return self._params.owner

    @property
    def insurance_fee(self) -> int:
        return self._params.insurance_fee

    @property
    def claim_amount(self) -> int:
        return self._params.claim_amount

    def update_insurance_fee(self, caller: str, new_fee: int) -> Result:
        """Установка новой премии (owner only).

        Returns:
            Ok(True) либо Err(UNAUTHORIZED)

        Raises:
            ValueError: Если new_fee не является неотрицательным целым
        """
        denied = self.access_control.authorize(caller, "update_insurance_fee")
        if denied is not None:
            logger.warning("update_insurance_fee denied: %s", denied.reason)
            return denied
        validate_amount(new_fee, "new_fee")

        old_fee = self._params.insurance_fee
        self._params = self._params.with_insurance_fee(new_fee)
        logger.info("insurance_fee updated: %d -> %d", old_fee, new_fee)
        return Ok(True)

    def update_claim_amount(self, caller: str, new_amount: int) -> Result:
        """Установка новой суммы выплаты по claim (owner only)."""
        denied = self.access_control.authorize(caller, "update_claim_amount")
        if denied is not None:
            logger.warning("update_claim_amount denied: %s", denied.reason)
            return denied
        validate_amount(new_amount, "new_amount")

        old_amount = self._params.claim_amount
        self._params = self._params.with_claim_amount(new_amount)
        logger.info("claim_amount updated: %d -> %d", old_amount, new_amount)
        return Ok(True)

    def restore(self, params: ConfigParams) -> None:
        """Откат к ранее снятому значению (используется атомарной секцией)."""
        self._params = params
