"""
Item — Модель позиции счёта

Immutable Pydantic модель. amount вычисляется из quantity × rate и
поэтому не может устареть относительно полей, из которых выводится.
"""

from pydantic import BaseModel, Field, computed_field


class Item(BaseModel):
    """
    Модель позиции (строка таблицы позиций).

    Все изменения позиции создают новый экземпляр (frozen=True).
    quantity неотрицательна по соглашению, но не валидируется:
    числовой ввод только приводится к типу.
    """

    id: str = Field(..., min_length=1, description="Уникальный идентификатор позиции")
    name: str = Field(default="", description="Наименование")
    quantity: float = Field(default=0.0, description="Количество")
    rate: float = Field(default=0.0, description="Цена за единицу")
    hsn: str = Field(default="", description="Код классификации (HSN)")

    model_config = {"frozen": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def amount(self) -> float:
        """Сумма позиции: quantity × rate."""
        return self.quantity * self.rate
