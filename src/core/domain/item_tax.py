"""
ItemTax — Ассоциация позиции и налога

Одна строка на каждую пару (Item, Tax). Денормализованные поля
(item_name, quantity, tax_label, tax_type, tax_per, charge_value):
копии для удобства отображения, синхронизируемые движком пересчёта.
"""

from typing import Union

from pydantic import BaseModel, Field, field_validator

from .tax import TaxPer, TaxType, normalize_tax_per, normalize_tax_type


class ItemTax(BaseModel):
    """
    Вклад одного налога в одну позицию.

    charge_value может быть переопределён вручную для отдельной пары;
    такое переопределение действует до следующей синхронизации
    (изменение позиции или налога).
    """

    id: str = Field(..., min_length=1, description="Уникальный идентификатор строки")
    item_id: str = Field(..., min_length=1, description="Ссылка на Item.id")
    tax_id: str = Field(..., min_length=1, description="Ссылка на Tax.id")

    # Денормализованные копии
    tax_label: str = Field(default="", description="Копия Tax.label")
    item_name: str = Field(default="", description="Копия Item.name")
    quantity: float = Field(default=0.0, description="Копия Item.quantity")
    tax_type: Union[TaxType, str] = Field(default=TaxType.PERCENTAGE, description="Копия Tax.tax_type")
    tax_per: Union[TaxPer, str] = Field(default=TaxPer.ON_ORDER, description="Копия Tax.tax_per")
    charge_value: float = Field(default=0.0, description="Копия Tax.charge_value (или override)")

    # Производное
    total_amount: float = Field(default=0.0, description="Вклад налога в позицию")

    model_config = {"frozen": True}

    @field_validator("tax_type", mode="before")
    @classmethod
    def _coerce_tax_type(cls, v: object) -> object:
        return normalize_tax_type(v)

    @field_validator("tax_per", mode="before")
    @classmethod
    def _coerce_tax_per(cls, v: object) -> object:
        return normalize_tax_per(v)

    @property
    def pair(self) -> tuple[str, str]:
        """Ключ пары (item_id, tax_id)."""
        return (self.item_id, self.tax_id)
