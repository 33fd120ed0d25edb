"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидатора снапшота:
- Валидность самой схемы
- Валидация экспортированных снапшотов движка
- Детекция нарушений required полей и типов
- Запрет лишних полей
"""

import copy

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    BillingSnapshotValidator,
    SchemaLoader,
    validate_billing_snapshot,
)
from src.core.domain import BillingSnapshot
from src.engine import BillingSession


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def session_snapshot() -> BillingSnapshot:
    """Снапшот с двумя позициями, тремя налогами и override."""
    session = BillingSession()
    session.add_item(name="Item A", quantity=2, rate=100, hsn="1234")
    session.add_tax(label="GST", tax_type="percentage", tax_per="onOrder", charge_value=18)
    session.add_tax(label="Fee", tax_type="amount", tax_per="onItem", charge_value=50)
    session.add_item(name="Item B", quantity=3, rate=10, hsn="5678")
    session.add_tax(label="Legacy", tax_type="compound", charge_value=1)
    row_id = session.snapshot.item_taxes[0].id
    session.update_item_tax(row_id, charge_value=5, total_amount=10)
    return session.snapshot


@pytest.fixture
def valid_contract(session_snapshot: BillingSnapshot) -> dict:
    return session_snapshot.to_contract()


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    def test_schema_loads_and_is_cached(self) -> None:
        loader = SchemaLoader()
        first = loader.load_schema("billing_snapshot")
        assert first["title"] == "BillingSnapshot"
        assert loader.load_schema("billing_snapshot") is first

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")


# =============================================================================
# VALID DATA
# =============================================================================


class TestValidSnapshots:
    """Экспорт движка соответствует контракту"""

    def test_empty_snapshot_valid(self) -> None:
        validate_billing_snapshot(BillingSnapshot().to_contract())

    def test_engine_snapshot_valid(self, valid_contract: dict) -> None:
        validate_billing_snapshot(valid_contract)
        assert BillingSnapshotValidator().is_valid(valid_contract)

    def test_every_intermediate_snapshot_valid(self) -> None:
        seen = []
        session = BillingSession()
        session.subscribe(lambda snapshot: seen.append(snapshot.to_contract()))
        session.add_tax(label="GST", charge_value=18)
        session.add_item(name="A", quantity=1, rate=10)
        session.update_item(session.snapshot.items[0].id, quantity=2)
        session.update_tax(session.snapshot.taxes[0].id, tax_type="onUnit")

        validator = BillingSnapshotValidator()
        assert len(seen) == 4
        for data in seen:
            validator.validate(data)

    def test_unknown_tax_type_allowed(self, valid_contract: dict) -> None:
        assert valid_contract["taxes"][2]["tax_type"] == "compound"


# =============================================================================
# INVALID DATA
# =============================================================================


class TestInvalidSnapshots:
    """Детекция нарушений контракта"""

    def test_missing_required_top_level(self, valid_contract: dict) -> None:
        data = copy.deepcopy(valid_contract)
        del data["item_taxes"]
        with pytest.raises(ValidationError, match="item_taxes"):
            validate_billing_snapshot(data)

    def test_missing_item_field(self, valid_contract: dict) -> None:
        data = copy.deepcopy(valid_contract)
        del data["items"][0]["amount"]
        with pytest.raises(ValidationError):
            validate_billing_snapshot(data)

    def test_wrong_type(self, valid_contract: dict) -> None:
        data = copy.deepcopy(valid_contract)
        data["taxes"][0]["charge_value"] = "18"
        with pytest.raises(ValidationError):
            validate_billing_snapshot(data)

    def test_negative_version(self, valid_contract: dict) -> None:
        data = copy.deepcopy(valid_contract)
        data["version"] = -1
        with pytest.raises(ValidationError):
            validate_billing_snapshot(data)

    def test_extra_field_rejected(self, valid_contract: dict) -> None:
        data = copy.deepcopy(valid_contract)
        data["item_taxes"][0]["itemId"] = "x"
        with pytest.raises(ValidationError):
            validate_billing_snapshot(data)

    def test_empty_id_rejected(self, valid_contract: dict) -> None:
        data = copy.deepcopy(valid_contract)
        data["items"][0]["id"] = ""
        assert not BillingSnapshotValidator().is_valid(data)
        errors = list(BillingSnapshotValidator().iter_errors(data))
        assert len(errors) == 1
