"""InsuranceLedger — публичная поверхность операций страхового леджера.

Фасад над ConfigStore, TreasuryLedger, PolicyRegistry и ClaimProcessor.
Состояние — явный объект, глобальных переменных нет.

Модель исполнения: single-writer, строго последовательно. Каждая мутирующая
операция выполняется в атомарной секции:
- все проверки выполняются до первой мутации, поэтому отказ (Err)
  не имеет наблюдаемого эффекта;
- при исключении (нарушение инварианта) состояние откатывается к
  значениям до вызова, исключение пробрасывается дальше.

Операции:
- buy_insurance(buyer, at_height)          → Ok | Err(0, 409)
- file_claim(holder, at_height)            → Ok | Err(1, 2, 3)
- has_valid_policy(identity, at_height)    → bool
- has_filed_claim(identity)                → bool
- get_contract_balance()                   → int
- update_insurance_fee(caller, new_fee)    → Ok | Err(403)
- update_claim_amount(caller, new_amount)  → Ok | Err(403)
- withdraw_excess_funds(caller, amount)    → Ok | Err(403, 406)
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from src.core.contracts.validators import validate_ledger_state
from src.core.domain.config_params import ConfigParams
from src.core.domain.ledger_state import LedgerState
from src.core.domain.policy import Policy
from src.core.domain.result import Err, ErrorCode, InvariantViolation, Ok, Result
from src.core.domain.units import validate_amount, validate_height, validate_identity
from src.core.log import get_logger

from .claim_processor import ClaimProcessor
from .config import LedgerConfig
from .config_store import ConfigStore
from .environment import FundsOracle
from .policy_registry import PolicyRegistry
from .treasury import TreasuryLedger

logger = get_logger(__name__)


class InsuranceLedger:
    """Страховой леджер: полисы, claims, казна, администрирование."""

    def __init__(
        self,
        owner: str,
        funds_oracle: FundsOracle,
        insurance_fee: Optional[int] = None,
        claim_amount: Optional[int] = None,
        initial_treasury: int = 0,
        config: Optional[LedgerConfig] = None,
    ):
        """
        Args:
            owner: identity владельца (фиксируется при деплое)
            funds_oracle: внешняя проверка средств покупателя
            insurance_fee: премия (default: config.default_insurance_fee)
            claim_amount: выплата по claim (default: config.default_claim_amount)
            initial_treasury: начальный баланс казны
            config: временные окна и параметры по умолчанию
        """
        validate_identity(owner, "owner")
        self.config = config or LedgerConfig()
        self.funds_oracle = funds_oracle

        self.config_store = ConfigStore(
            ConfigParams(
                owner=owner,
                insurance_fee=(
                    self.config.default_insurance_fee if insurance_fee is None else insurance_fee
                ),
                claim_amount=(
                    self.config.default_claim_amount if claim_amount is None else claim_amount
                ),
            )
        )
        self.treasury = TreasuryLedger(initial_treasury)
        self.registry = PolicyRegistry(self.config)
        self.claim_processor = ClaimProcessor(
            self.registry, self.treasury, lambda: self.config_store.claim_amount
        )

        self._last_height: Optional[int] = None

    # =========================================================================
    # АТОМАРНОСТЬ
    # =========================================================================

    @contextmanager
    def _atomic(self) -> Iterator[None]:
        saved_params = self.config_store.params
        saved_balance = self.treasury.balance
        saved_policies = self.registry.snapshot()
        saved_height = self._last_height
        try:
            yield
        except Exception:
            self.config_store.restore(saved_params)
            self.treasury.restore(saved_balance)
            self.registry.restore(saved_policies)
            self._last_height = saved_height
            raise

    def _check_height(self, at_height: int) -> None:
        validate_height(at_height, "at_height")
        if self._last_height is not None and at_height < self._last_height:
            raise InvariantViolation(
                f"height moved backwards: {at_height} < {self._last_height}"
            )

    @property
    def last_height(self) -> Optional[int]:
        return self._last_height

    # =========================================================================
    # ПОКУПКА ПОЛИСА
    # =========================================================================

    def buy_insurance(self, buyer: str, at_height: int) -> Result:
        """
        Покупка полиса за текущую премию.

        Повторная покупка при действующем неоплаченном полисе отклоняется
        (POLICY_ALREADY_ACTIVE): иначе активный полис молча терялся бы.
        Истёкший или уже оплаченный полис можно продлить новой покупкой.

        Returns:
            Ok(True) либо Err(INSUFFICIENT_FUNDS | POLICY_ALREADY_ACTIVE)
        """
        validate_identity(buyer, "buyer")
        with self._atomic():
            self._check_height(at_height)
            fee = self.config_store.insurance_fee

            if not self.funds_oracle.has_sufficient_funds(buyer, fee):
                logger.debug("buy_insurance rejected: %s cannot pay fee %d", buyer, fee)
                return Err(ErrorCode.INSUFFICIENT_FUNDS, reason=f"{buyer} cannot pay fee {fee}")

            if self.registry.has_active_unclaimed(buyer, at_height):
                logger.debug("buy_insurance rejected: %s already holds an active policy", buyer)
                return Err(
                    ErrorCode.POLICY_ALREADY_ACTIVE,
                    reason=f"{buyer} holds an active unclaimed policy",
                )

            self.treasury.credit(fee)
            policy = self.registry.issue_policy(buyer, at_height, fee)
            collect = getattr(self.funds_oracle, "collect", None)
            if collect is not None:
                collect(buyer, fee)

            self._last_height = at_height
            logger.info(
                "policy issued: holder=%s start_height=%d premium=%d",
                policy.holder, policy.start_height, policy.premium_paid,
            )
            return Ok(True)

    # =========================================================================
    # CLAIM
    # =========================================================================

    def file_claim(self, holder: str, at_height: int) -> Result:
        """
        Подача claim держателем полиса.

        Returns:
            Ok(True) либо Err(POLICY_EXPIRED_OR_MISSING | CLAIM_NOT_ELIGIBLE |
            INSUFFICIENT_TREASURY)
        """
        validate_identity(holder, "holder")
        with self._atomic():
            self._check_height(at_height)
            result = self.claim_processor.file_claim(holder, at_height)
            if not result.is_ok:
                logger.debug("file_claim rejected: holder=%s code=%d %s",
                             holder, result.code, result.reason)
                return result

            self._last_height = at_height
            logger.info(
                "claim paid: holder=%s height=%d balance=%d",
                holder, at_height, self.treasury.balance,
            )
            return result

    # =========================================================================
    # READ-ONLY ЗАПРОСЫ
    # =========================================================================

    def has_valid_policy(self, identity: str, at_height: int) -> bool:
        return self.registry.is_valid(identity, at_height)

    def has_filed_claim(self, identity: str) -> bool:
        return self.registry.has_claimed(identity)

    def get_contract_balance(self) -> int:
        return self.treasury.balance

    def get_policy(self, identity: str) -> Optional[Policy]:
        return self.registry.get(identity)

    @property
    def owner(self) -> str:
        return self.config_store.owner

    @property
    def insurance_fee(self) -> int:
        return self.config_store.insurance_fee

    @property
    def claim_amount(self) -> int:
        return self.config_store.claim_amount

    # =========================================================================
    # АДМИНИСТРИРОВАНИЕ (owner only)
    # =========================================================================

    def update_insurance_fee(self, caller: str, new_fee: int) -> Result:
        with self._atomic():
            return self.config_store.update_insurance_fee(caller, new_fee)

    def update_claim_amount(self, caller: str, new_amount: int) -> Result:
        with self._atomic():
            return self.config_store.update_claim_amount(caller, new_amount)

    def withdraw_excess_funds(self, caller: str, amount: int) -> Result:
        """
        Вывод средств из казны владельцем.

        Отказ казны переводится в EXCESS_WITHDRAWAL_DENIED (406), чтобы
        отличать его от нехватки казны на пути claim.

        Returns:
            Ok(True) либо Err(UNAUTHORIZED | EXCESS_WITHDRAWAL_DENIED)
        """
        with self._atomic():
            denied = self.config_store.access_control.authorize(caller, "withdraw_excess_funds")
            if denied is not None:
                logger.warning("withdraw_excess_funds denied: %s", denied.reason)
                return denied
            validate_amount(amount)

            debit = self.treasury.debit(amount)
            if not debit.is_ok:
                logger.warning("withdraw_excess_funds denied: %s", debit.reason)
                return Err(ErrorCode.EXCESS_WITHDRAWAL_DENIED, reason=debit.reason)

            logger.info("withdrawn %d, treasury balance=%d", amount, self.treasury.balance)
            return Ok(True)

    # =========================================================================
    # СНАПШОТЫ
    # =========================================================================

    def snapshot(self) -> LedgerState:
        return LedgerState(
            height=self._last_height,
            config=self.config_store.params,
            windows=self.config.windows(),
            treasury_balance=self.treasury.balance,
            policies=sorted(self.registry, key=lambda p: p.holder),
        )

    def export_state(self) -> Dict[str, Any]:
        """
        Экспорт снапшота в JSON-совместимый dict.

        Raises:
            ValidationError: Если снапшот не соответствует ledger_state.json
        """
        data = self.snapshot().model_dump(mode="json")
        validate_ledger_state(data)
        return data

    @classmethod
    def from_snapshot(
        cls,
        state: LedgerState,
        funds_oracle: FundsOracle,
        config: Optional[LedgerConfig] = None,
    ) -> "InsuranceLedger":
        """
        Восстановление леджера из снапшота.

        Временные окна берутся из снапшота. Переданный config должен
        совпадать с ними, иначе восстановленный леджер по-другому
        оценивал бы валидность полисов и claims.

        Raises:
            ValueError: Если окна config расходятся с окнами снапшота
        """
        if config is None:
            config = LedgerConfig.from_windows(state.windows)
        elif config.windows() != state.windows:
            raise ValueError(
                f"config windows {config.windows()} do not match snapshot windows {state.windows}"
            )

        ledger = cls(
            owner=state.config.owner,
            funds_oracle=funds_oracle,
            insurance_fee=state.config.insurance_fee,
            claim_amount=state.config.claim_amount,
            initial_treasury=state.treasury_balance,
            config=config,
        )
        ledger.registry.restore({p.holder: p for p in state.policies})
        ledger._last_height = state.height
        return ledger

    @classmethod
    def load_state(
        cls,
        data: Dict[str, Any],
        funds_oracle: FundsOracle,
        config: Optional[LedgerConfig] = None,
    ) -> "InsuranceLedger":
        """
        Восстановление из JSON dict (ранее полученного через export_state).

        Raises:
            ValidationError: Если данные не соответствуют ledger_state.json
            pydantic.ValidationError: Если нарушены инварианты модели
        """
        validate_ledger_state(data)
        return cls.from_snapshot(LedgerState.model_validate(data), funds_oracle, config)
