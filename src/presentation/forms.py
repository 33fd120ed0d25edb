"""
Forms — приведение сырого ввода формы к типизированным командам.

Граница представления: числовые поля приходят строками из полей ввода
и приводятся здесь (coerce_number), а не внутри движка.
Текстовые поля передаются как есть.
"""

from typing import Any, Optional

from src.core.math.numerical_safeguards import coerce_number
from src.engine.commands import AddItem, AddTax, UpdateItem, UpdateItemTax, UpdateTax

ITEM_NUMERIC_FIELDS = frozenset({"quantity", "rate"})
TAX_NUMERIC_FIELDS = frozenset({"charge_value"})
ITEM_TAX_NUMERIC_FIELDS = frozenset({"charge_value", "total_amount"})


def _coerce_fields(raw: dict[str, Any], numeric: frozenset[str]) -> dict[str, Any]:
    """Числовые поля → float, None-поля отбрасываются."""
    return {
        key: coerce_number(value) if key in numeric else value
        for key, value in raw.items()
        if value is not None
    }


def item_form(name: str = "", quantity: Any = "", rate: Any = "", hsn: str = "") -> AddItem:
    """Форма новой позиции."""
    return AddItem(name=name, quantity=coerce_number(quantity), rate=coerce_number(rate), hsn=hsn)


def tax_form(
    label: str = "",
    tax_type: str = "percentage",
    tax_per: str = "onOrder",
    charge_value: Any = "",
) -> AddTax:
    """Форма нового налога."""
    return AddTax(
        label=label,
        tax_type=tax_type,
        tax_per=tax_per,
        charge_value=coerce_number(charge_value),
    )


def item_edit_form(item_id: str, **raw: Optional[Any]) -> UpdateItem:
    """Правка ячейки таблицы позиций, например item_edit_form(id, quantity="4")."""
    return UpdateItem(id=item_id, **_coerce_fields(raw, ITEM_NUMERIC_FIELDS))


def tax_edit_form(tax_id: str, **raw: Optional[Any]) -> UpdateTax:
    """Правка ячейки таблицы налогов."""
    return UpdateTax(id=tax_id, **_coerce_fields(raw, TAX_NUMERIC_FIELDS))


def item_tax_edit_form(row_id: str, **raw: Optional[Any]) -> UpdateItemTax:
    """
    Ручной override строки ItemTax.

    total_amount не вычисляется: если не передан, у строки остаётся прежний.
    """
    return UpdateItemTax(id=row_id, **_coerce_fields(raw, ITEM_TAX_NUMERIC_FIELDS))
