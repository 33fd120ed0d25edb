"""
Тесты для формулы налога calculate_tax_amount

Покрывает:
- percentage / amount / onUnit
- fail-soft для нераспознанного tax_type
- strict mode
- tax_per не влияет на результат
"""

import pytest

from src.core.domain import Item, Tax, TaxPer, TaxType
from src.engine import UnknownTaxTypeError, calculate_tax_amount


@pytest.fixture
def item() -> Item:
    """Позиция: qty=2, rate=100 (amount=200)."""
    return Item(id="i1", name="Item A", quantity=2, rate=100, hsn="1234")


class TestTaxFormula:
    """Тесты вариантов формулы."""

    def test_percentage_of_item_amount(self, item: Item) -> None:
        """200 × 18% = 36."""
        tax = Tax(id="t1", tax_type=TaxType.PERCENTAGE, charge_value=18)
        assert calculate_tax_amount(item, tax) == pytest.approx(36.0)

    def test_flat_amount_independent_of_item(self, item: Item) -> None:
        tax = Tax(id="t1", tax_type=TaxType.AMOUNT, charge_value=50)
        assert calculate_tax_amount(item, tax) == 50.0
        assert calculate_tax_amount(Item(id="i2", quantity=0, rate=0), tax) == 50.0

    def test_on_unit_times_quantity(self) -> None:
        """qty=3 × 5 = 15."""
        tax = Tax(id="t1", tax_type=TaxType.ON_UNIT, charge_value=5)
        assert calculate_tax_amount(Item(id="i1", quantity=3, rate=999), tax) == 15.0

    def test_string_tax_type_accepted(self, item: Item) -> None:
        tax = Tax(id="t1", tax_type="onUnit", charge_value=5)
        assert calculate_tax_amount(item, tax) == 10.0

    def test_unknown_tax_type_contributes_zero(self, item: Item) -> None:
        tax = Tax(id="t1", tax_type="compound", charge_value=18)
        assert calculate_tax_amount(item, tax) == 0.0

    def test_unknown_tax_type_strict_raises(self, item: Item) -> None:
        tax = Tax(id="t1", tax_type="compound", charge_value=18)
        with pytest.raises(UnknownTaxTypeError, match="compound"):
            calculate_tax_amount(item, tax, strict=True)

    @pytest.mark.parametrize("tax_per", [TaxPer.ON_ORDER, TaxPer.ON_ITEM])
    def test_tax_per_does_not_change_result(self, item: Item, tax_per: TaxPer) -> None:
        tax = Tax(id="t1", tax_type=TaxType.PERCENTAGE, tax_per=tax_per, charge_value=18)
        assert calculate_tax_amount(item, tax) == pytest.approx(36.0)

    def test_zero_charge_value(self, item: Item) -> None:
        for tax_type in TaxType:
            assert calculate_tax_amount(item, Tax(id="t1", tax_type=tax_type)) == 0.0

    def test_non_finite_result_sanitized(self) -> None:
        big = Item(id="i1", quantity=1e308, rate=1e308)
        tax = Tax(id="t1", tax_type=TaxType.PERCENTAGE, charge_value=18)
        assert calculate_tax_amount(big, tax) == 0.0
