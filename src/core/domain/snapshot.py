"""
BillingSnapshot — Снапшот данных калькулятора счёта

Immutable Pydantic модель, представляющая полный согласованный набор
данных (items, taxes, item_taxes) в один момент времени.
Снапшот заменяется целиком при каждой команде; version монотонно растёт.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from src.core.math.numerical_safeguards import sum_amounts

from .item import Item
from .item_tax import ItemTax
from .tax import Tax


class BillingSnapshot(BaseModel):
    """
    Снапшот калькулятора счёта.

    Инварианты (поддерживаются RecalculationEngine):
    - для каждой пары (Item, Tax) ровно одна строка ItemTax
    - Tax.total_amount = сумма total_amount строк этого налога
    - порядок последовательностей = порядок создания
    """

    version: int = Field(default=0, ge=0, description="Монотонная версия снапшота")
    items: tuple[Item, ...] = Field(default=(), description="Позиции в порядке создания")
    taxes: tuple[Tax, ...] = Field(default=(), description="Налоги в порядке создания")
    item_taxes: tuple[ItemTax, ...] = Field(
        default=(), description="Ассоциации позиция × налог в порядке создания"
    )

    model_config = {"frozen": True}

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_item(self, item_id: str) -> Optional[Item]:
        return next((item for item in self.items if item.id == item_id), None)

    def find_tax(self, tax_id: str) -> Optional[Tax]:
        return next((tax for tax in self.taxes if tax.id == tax_id), None)

    def find_item_tax(self, row_id: str) -> Optional[ItemTax]:
        return next((row for row in self.item_taxes if row.id == row_id), None)

    def find_pair(self, item_id: str, tax_id: str) -> Optional[ItemTax]:
        """Строка ItemTax для пары (item_id, tax_id)."""
        return next(
            (row for row in self.item_taxes if row.item_id == item_id and row.tax_id == tax_id),
            None,
        )

    def rows_for_tax(self, tax_id: str) -> tuple[ItemTax, ...]:
        return tuple(row for row in self.item_taxes if row.tax_id == tax_id)

    def rows_for_item(self, item_id: str) -> tuple[ItemTax, ...]:
        return tuple(row for row in self.item_taxes if row.item_id == item_id)

    # -------------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------------

    @property
    def subtotal(self) -> float:
        """Сумма позиций без налогов."""
        return sum_amounts(item.amount for item in self.items)

    @property
    def tax_total(self) -> float:
        """Сумма всех налогов."""
        return sum_amounts(tax.total_amount for tax in self.taxes)

    @property
    def grand_total(self) -> float:
        return self.subtotal + self.tax_total

    # -------------------------------------------------------------------------
    # Comparison / export
    # -------------------------------------------------------------------------

    def content_key(self) -> tuple[Any, ...]:
        """
        Содержимое снапшота без идентификаторов и версии.

        Строки ItemTax адресуются позициями (index позиции, index налога)
        и сортируются, поэтому порядок создания сущностей не влияет на ключ.
        Используется для сравнения снапшотов "по содержимому".
        """
        item_index = {item.id: idx for idx, item in enumerate(self.items)}
        tax_index = {tax.id: idx for idx, tax in enumerate(self.taxes)}

        items = tuple(
            (item.name, item.quantity, item.rate, item.amount, item.hsn) for item in self.items
        )
        taxes = tuple(
            (tax.label, str(tax.tax_type), str(tax.tax_per), tax.charge_value, tax.total_amount)
            for tax in self.taxes
        )
        rows = tuple(
            sorted(
                (
                    item_index.get(row.item_id, -1),
                    tax_index.get(row.tax_id, -1),
                    row.tax_label,
                    row.item_name,
                    row.quantity,
                    str(row.tax_type),
                    str(row.tax_per),
                    row.charge_value,
                    row.total_amount,
                )
                for row in self.item_taxes
            )
        )
        return (items, taxes, rows)

    def to_contract(self) -> dict[str, Any]:
        """
        JSON-совместимое представление снапшота.

        Соответствует contracts/schema/billing_snapshot.json.
        """
        data = self.model_dump(mode="json")
        data["totals"] = {
            "subtotal": self.subtotal,
            "tax_total": self.tax_total,
            "grand_total": self.grand_total,
        }
        return data
