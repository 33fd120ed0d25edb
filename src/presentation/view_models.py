"""
View models — строки таблиц для отображения снапшота.

Денежные суммы форматируются с числом знаков из EngineConfig.money_decimals
(по умолчанию 2); сессия передаёт свою конфигурацию.
Логики пересчёта здесь нет: только чтение полей снапшота.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain import BillingSnapshot, TaxPer, TaxType
from src.core.math.numerical_safeguards import format_money
from src.engine.config import EngineConfig

TAX_TYPE_LABELS: dict[str, str] = {
    TaxType.PERCENTAGE.value: "Percentage",
    TaxType.AMOUNT.value: "Amount",
    TaxType.ON_UNIT.value: "Per Unit",
}

TAX_PER_LABELS: dict[str, str] = {
    TaxPer.ON_ORDER.value: "Order",
    TaxPer.ON_ITEM.value: "Item",
}


def _value(enum_or_str: object) -> str:
    return getattr(enum_or_str, "value", str(enum_or_str))


def tax_type_label(tax_type: object) -> str:
    value = _value(tax_type)
    return TAX_TYPE_LABELS.get(value, value)


def tax_per_label(tax_per: object) -> str:
    # Всё, что не onOrder, отображается как позиционный налог
    return TAX_PER_LABELS.get(_value(tax_per), "Item")


def _decimals(config: Optional[EngineConfig]) -> int:
    return (config or EngineConfig()).money_decimals


@dataclass(frozen=True)
class ItemRowView:
    id: str
    name: str
    quantity: float
    rate: float
    amount: str
    hsn: str


@dataclass(frozen=True)
class TaxRowView:
    id: str
    label: str
    tax_type: str
    tax_type_label: str
    tax_per: str
    tax_per_label: str
    charge_value: float
    total: str


@dataclass(frozen=True)
class ItemTaxRowView:
    id: str
    item_name: str
    tax_label: str
    tax_type: str
    tax_per_label: str
    charge_value: float
    # override charge_value разрешён только для налогов уровня позиции
    charge_editable: bool
    total: str


@dataclass(frozen=True)
class TotalsView:
    subtotal: str
    tax_total: str
    grand_total: str


def item_rows(snapshot: BillingSnapshot, config: Optional[EngineConfig] = None) -> list[ItemRowView]:
    decimals = _decimals(config)
    return [
        ItemRowView(
            id=item.id,
            name=item.name,
            quantity=item.quantity,
            rate=item.rate,
            amount=format_money(item.amount, decimals),
            hsn=item.hsn,
        )
        for item in snapshot.items
    ]


def tax_rows(snapshot: BillingSnapshot, config: Optional[EngineConfig] = None) -> list[TaxRowView]:
    decimals = _decimals(config)
    return [
        TaxRowView(
            id=tax.id,
            label=tax.label,
            tax_type=_value(tax.tax_type),
            tax_type_label=tax_type_label(tax.tax_type),
            tax_per=_value(tax.tax_per),
            tax_per_label=tax_per_label(tax.tax_per),
            charge_value=tax.charge_value,
            total=format_money(tax.total_amount, decimals),
        )
        for tax in snapshot.taxes
    ]


def item_tax_rows(
    snapshot: BillingSnapshot, config: Optional[EngineConfig] = None
) -> list[ItemTaxRowView]:
    decimals = _decimals(config)
    return [
        ItemTaxRowView(
            id=row.id,
            item_name=row.item_name,
            tax_label=row.tax_label,
            tax_type=_value(row.tax_type),
            tax_per_label=tax_per_label(row.tax_per),
            charge_value=row.charge_value,
            charge_editable=_value(row.tax_per) != TaxPer.ON_ORDER.value,
            total=format_money(row.total_amount, decimals),
        )
        for row in snapshot.item_taxes
    ]


def totals_row(snapshot: BillingSnapshot, config: Optional[EngineConfig] = None) -> TotalsView:
    decimals = _decimals(config)
    return TotalsView(
        subtotal=format_money(snapshot.subtotal, decimals),
        tax_total=format_money(snapshot.tax_total, decimals),
        grand_total=format_money(snapshot.grand_total, decimals),
    )
