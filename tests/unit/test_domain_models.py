"""
Tests for domain models

Покрывает:
- Policy: окно действия, выдержка claim, immutability
- ConfigParams: defaults, обновления через новые экземпляры
- LedgerState: сериализация, уникальность holder
- Result: Ok/Err, исторический формат ответа
"""

import pytest
from pydantic import ValidationError

from src.core.domain import (
    CLAIM_WAITING_PERIOD,
    DEFAULT_CLAIM_AMOUNT,
    DEFAULT_INSURANCE_FEE,
    POLICY_DURATION,
    ConfigParams,
    Err,
    ErrorCode,
    InvariantViolation,
    LedgerState,
    Ok,
    Policy,
)


@pytest.fixture
def policy():
    """Полис, купленный на высоте 100000."""
    return Policy(holder="0x123", start_height=100_000, premium_paid=1_000)


# =============================================================================
# POLICY
# =============================================================================


class TestPolicy:
    """Тесты Policy."""

    def test_defaults_unclaimed(self, policy):
        assert policy.claimed is False

    def test_active_window_bounds(self, policy):
        """Окно [start, start + POLICY_DURATION)."""
        assert policy.is_active_at(100_000)
        assert policy.is_active_at(100_000 + POLICY_DURATION - 1)
        assert not policy.is_active_at(100_000 + POLICY_DURATION)
        assert not policy.is_active_at(99_999)

    def test_custom_duration(self, policy):
        assert policy.expiry_height(policy_duration=10) == 100_010
        assert not policy.is_active_at(100_010, policy_duration=10)

    def test_waiting_period_boundary(self, policy):
        assert not policy.is_past_waiting_period(100_000 + CLAIM_WAITING_PERIOD - 1)
        assert policy.is_past_waiting_period(100_000 + CLAIM_WAITING_PERIOD)

    def test_mark_claimed_returns_new_instance(self, policy):
        claimed = policy.mark_claimed()
        assert claimed.claimed is True
        assert policy.claimed is False
        assert claimed.start_height == policy.start_height

    def test_frozen(self, policy):
        with pytest.raises(ValidationError):
            policy.claimed = True

    def test_negative_start_rejected(self):
        with pytest.raises(ValidationError):
            Policy(holder="0x123", start_height=-1, premium_paid=1_000)

    def test_empty_holder_rejected(self):
        with pytest.raises(ValidationError):
            Policy(holder="", start_height=0, premium_paid=0)


# =============================================================================
# CONFIG PARAMS
# =============================================================================


class TestConfigParams:
    """Тесты ConfigParams."""

    def test_defaults(self):
        params = ConfigParams(owner="0xowner")
        assert params.insurance_fee == DEFAULT_INSURANCE_FEE
        assert params.claim_amount == DEFAULT_CLAIM_AMOUNT

    def test_with_insurance_fee(self):
        params = ConfigParams(owner="0xowner")
        updated = params.with_insurance_fee(2_500)
        assert updated.insurance_fee == 2_500
        assert params.insurance_fee == DEFAULT_INSURANCE_FEE
        assert updated.owner == "0xowner"

    def test_with_claim_amount(self):
        updated = ConfigParams(owner="0xowner").with_claim_amount(50)
        assert updated.claim_amount == 50

    def test_negative_fee_rejected(self):
        with pytest.raises(ValidationError):
            ConfigParams(owner="0xowner", insurance_fee=-1)


# =============================================================================
# LEDGER STATE
# =============================================================================


class TestLedgerState:
    """Тесты LedgerState."""

    def test_json_roundtrip(self, policy):
        state = LedgerState(
            height=100_000,
            config=ConfigParams(owner="0xowner"),
            treasury_balance=1_000,
            policies=[policy],
        )
        restored = LedgerState.model_validate_json(state.model_dump_json())
        assert restored == state

    def test_height_nullable(self):
        state = LedgerState(config=ConfigParams(owner="0xowner"), treasury_balance=0)
        assert state.height is None
        assert state.schema_version == "1"

    def test_duplicate_holders_rejected(self, policy):
        with pytest.raises(ValidationError, match="duplicate holders"):
            LedgerState(
                config=ConfigParams(owner="0xowner"),
                treasury_balance=0,
                policies=[policy, policy.mark_claimed()],
            )

    def test_negative_balance_rejected(self):
        with pytest.raises(ValidationError):
            LedgerState(config=ConfigParams(owner="0xowner"), treasury_balance=-1)


# =============================================================================
# RESULT
# =============================================================================


class TestResult:
    """Тесты Ok/Err."""

    def test_error_codes_stable(self):
        assert ErrorCode.INSUFFICIENT_FUNDS == 0
        assert ErrorCode.CLAIM_NOT_ELIGIBLE == 1
        assert ErrorCode.POLICY_EXPIRED_OR_MISSING == 2
        assert ErrorCode.UNAUTHORIZED == 403
        assert ErrorCode.EXCESS_WITHDRAWAL_DENIED == 406

    def test_ok_legacy_shape(self):
        assert Ok(True).to_legacy() == {"isOk": True, "value": True}

    def test_err_legacy_shape(self):
        err = Err(ErrorCode.CLAIM_NOT_ELIGIBLE, reason="too early")
        assert err.to_legacy() == {"isOk": False, "value": 1}
        assert not err.is_ok

    def test_err_equality_includes_reason(self):
        assert Err(ErrorCode.UNAUTHORIZED) == Err(ErrorCode.UNAUTHORIZED)
        assert Err(ErrorCode.UNAUTHORIZED, "a").code == Err(ErrorCode.UNAUTHORIZED, "b").code

    def test_invariant_violation_is_assertion(self):
        assert issubclass(InvariantViolation, AssertionError)
