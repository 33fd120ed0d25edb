"""
Tax — Модель налога (строка таблицы налогов)

Immutable Pydantic модель. total_amount является производным полем,
поддерживается движком пересчёта как сумма вкладов по всем позициям.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class TaxType(str, Enum):
    """Вариант формулы налога"""

    PERCENTAGE = "percentage"  # процент от суммы позиции
    AMOUNT = "amount"  # фиксированная сумма на позицию
    ON_UNIT = "onUnit"  # ставка за единицу количества


class TaxPer(str, Enum):
    """
    Группировка налога: на заказ или на позицию.

    Описательное поле: на формулу не влияет.
    """

    ON_ORDER = "onOrder"
    ON_ITEM = "onItem"


def normalize_tax_type(value: object) -> object:
    """Известные строки → TaxType, неизвестные сохраняются как есть."""
    if isinstance(value, TaxType):
        return value
    try:
        return TaxType(value)
    except ValueError:
        return value


def normalize_tax_per(value: object) -> object:
    """Известные строки → TaxPer, неизвестные сохраняются как есть."""
    if isinstance(value, TaxPer):
        return value
    try:
        return TaxPer(value)
    except ValueError:
        return value


# =============================================================================
# TAX MODEL
# =============================================================================


class Tax(BaseModel):
    """
    Модель налога.

    tax_type допускает нераспознанную строку: такой налог хранится и
    отображается, но его вклад в любую позицию равен 0.
    """

    id: str = Field(..., min_length=1, description="Уникальный идентификатор налога")
    label: str = Field(default="", description="Название налога (например, 'GST')")
    tax_type: Union[TaxType, str] = Field(
        default=TaxType.PERCENTAGE, description="Вариант формулы налога"
    )
    tax_per: Union[TaxPer, str] = Field(
        default=TaxPer.ON_ORDER, description="Группировка (onOrder/onItem), описательная"
    )
    charge_value: float = Field(
        default=0.0, description="Параметр формулы (процент, сумма или ставка за единицу)"
    )
    total_amount: float = Field(
        default=0.0, description="Сумма вкладов налога по всем позициям (производное)"
    )

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
    def is_recognized(self) -> bool:
        """True если tax_type входит в известные варианты формулы."""
        return isinstance(self.tax_type, TaxType)
