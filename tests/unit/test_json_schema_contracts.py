"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей и типов
- Интеграция с Pydantic моделями
"""

import pytest
from jsonschema import Draft202012Validator, ValidationError

from src.core.contracts import (
    LedgerStateValidator,
    PolicyValidator,
    SchemaLoader,
    validate_ledger_state,
    validate_policy,
)
from src.core.domain import ConfigParams, LedgerState, Policy


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_policy_data():
    return {
        "holder": "0x123",
        "start_height": 100000,
        "premium_paid": 1000,
        "claimed": False,
    }


@pytest.fixture
def valid_ledger_state_data(valid_policy_data):
    return {
        "schema_version": "1",
        "height": 100000,
        "config": {"owner": "0xowner", "insurance_fee": 1000, "claim_amount": 800},
        "windows": {"policy_duration": 52560, "claim_waiting_period": 144},
        "treasury_balance": 1000,
        "policies": [valid_policy_data],
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем."""

    @pytest.mark.parametrize("name", ["policy", "ledger_state"])
    def test_schemas_are_valid(self, name):
        schema = SchemaLoader().load_schema(name)
        Draft202012Validator.check_schema(schema)

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("policy") is loader.load_schema("policy")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")


# =============================================================================
# POLICY CONTRACT
# =============================================================================


class TestPolicyContract:
    """Тесты policy.json."""

    def test_valid(self, valid_policy_data):
        validate_policy(valid_policy_data)

    @pytest.mark.parametrize("field", ["holder", "start_height", "premium_paid", "claimed"])
    def test_missing_required(self, valid_policy_data, field):
        del valid_policy_data[field]
        with pytest.raises(ValidationError):
            validate_policy(valid_policy_data)

    def test_negative_height(self, valid_policy_data):
        valid_policy_data["start_height"] = -1
        assert not PolicyValidator().is_valid(valid_policy_data)

    def test_float_amount_rejected(self, valid_policy_data):
        valid_policy_data["premium_paid"] = 10.5
        assert not PolicyValidator().is_valid(valid_policy_data)

    def test_extra_field_rejected(self, valid_policy_data):
        valid_policy_data["expiry"] = 1
        with pytest.raises(ValidationError):
            validate_policy(valid_policy_data)

    def test_pydantic_model_matches_schema(self):
        policy = Policy(holder="0xabc", start_height=5, premium_paid=10, claimed=True)
        validate_policy(policy.model_dump(mode="json"))


# =============================================================================
# LEDGER STATE CONTRACT
# =============================================================================


class TestLedgerStateContract:
    """Тесты ledger_state.json."""

    def test_valid(self, valid_ledger_state_data):
        validate_ledger_state(valid_ledger_state_data)

    def test_null_height(self, valid_ledger_state_data):
        valid_ledger_state_data["height"] = None
        validate_ledger_state(valid_ledger_state_data)

    def test_negative_balance(self, valid_ledger_state_data):
        valid_ledger_state_data["treasury_balance"] = -1
        with pytest.raises(ValidationError):
            validate_ledger_state(valid_ledger_state_data)

    def test_wrong_schema_version(self, valid_ledger_state_data):
        valid_ledger_state_data["schema_version"] = "2"
        assert not LedgerStateValidator().is_valid(valid_ledger_state_data)

    def test_collects_all_errors(self, valid_ledger_state_data):
        valid_ledger_state_data["treasury_balance"] = -1
        valid_ledger_state_data["config"]["owner"] = ""
        errors = list(LedgerStateValidator().iter_errors(valid_ledger_state_data))
        assert len(errors) == 2

    def test_pydantic_model_matches_schema(self):
        state = LedgerState(
            height=None,
            config=ConfigParams(owner="0xowner"),
            treasury_balance=0,
            policies=[Policy(holder="0x1", start_height=0, premium_paid=0)],
        )
        validate_ledger_state(state.model_dump(mode="json"))

    def test_windows_required(self, valid_ledger_state_data):
        del valid_ledger_state_data["windows"]
        with pytest.raises(ValidationError):
            validate_ledger_state(valid_ledger_state_data)

    def test_zero_policy_duration_rejected(self, valid_ledger_state_data):
        valid_ledger_state_data["windows"]["policy_duration"] = 0
        assert not LedgerStateValidator().is_valid(valid_ledger_state_data)


class TestSchemaPackaging:
    """Схемы лежат внутри пакета src.core.contracts."""

    def test_schema_dir_inside_package(self):
        import src.core.contracts as contracts_pkg
        from pathlib import Path

        loader = SchemaLoader()
        package_dir = Path(contracts_pkg.__file__).parent
        assert loader._schema_dir == package_dir / "schema"
        assert (package_dir / "schema" / "ledger_state.json").is_file()
