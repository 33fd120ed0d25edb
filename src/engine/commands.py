"""
Команды движка пересчёта — типизированные payload'ы.

Каждая команда является immutable Pydantic моделью. Команды создания задают
значения по умолчанию (ноль / пустая строка) для всех полей; команды
изменения требуют id, а остальные поля опциональны: None означает
"не изменять".

Поля принимают как snake_case имена, так и camelCase ключи формы
(chargeValue, taxType, ...), чтобы payload из UI можно было передать
как есть после приведения числовых полей.
"""

from typing import Any, ClassVar, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, ValidationInfo, field_validator

from src.core.domain import TaxPer, TaxType, normalize_tax_per, normalize_tax_type


# =============================================================================
# BASE
# =============================================================================


class BillingCommand(BaseModel):
    """Базовый класс команд."""

    command_name: ClassVar[str] = ""

    model_config = {"frozen": True}

    @field_validator("tax_type", "tax_per", mode="before", check_fields=False)
    @classmethod
    def _normalize_tax_enums(cls, v: object, info: ValidationInfo) -> object:
        if v is None:
            return v
        if info.field_name == "tax_type":
            return normalize_tax_type(v)
        return normalize_tax_per(v)

    def changes(self) -> dict[str, Any]:
        """Явно заданные поля команды (без id и None-значений)."""
        return self.model_dump(exclude={"id"}, exclude_none=True)


# =============================================================================
# CREATE COMMANDS
# =============================================================================


class AddItem(BillingCommand):
    """Создание позиции. id генерируется движком."""

    command_name: ClassVar[str] = "ADD_ITEM"

    name: str = Field(default="")
    quantity: float = Field(default=0.0)
    rate: float = Field(default=0.0)
    hsn: str = Field(default="")


class AddTax(BillingCommand):
    """Создание налога. id генерируется движком, total_amount вычисляется."""

    command_name: ClassVar[str] = "ADD_TAX"

    label: str = Field(default="", validation_alias=AliasChoices("label", "tax"))
    tax_type: Union[TaxType, str] = Field(
        default=TaxType.PERCENTAGE, validation_alias=AliasChoices("tax_type", "taxType")
    )
    tax_per: Union[TaxPer, str] = Field(
        default=TaxPer.ON_ORDER, validation_alias=AliasChoices("tax_per", "taxPer")
    )
    charge_value: float = Field(
        default=0.0, validation_alias=AliasChoices("charge_value", "chargeValue")
    )


# =============================================================================
# UPDATE COMMANDS
# =============================================================================


class UpdateItem(BillingCommand):
    """Частичное изменение позиции по id."""

    command_name: ClassVar[str] = "UPDATE_ITEM"

    id: str
    name: Optional[str] = None
    quantity: Optional[float] = None
    rate: Optional[float] = None
    hsn: Optional[str] = None


class UpdateTax(BillingCommand):
    """Частичное изменение налога по id."""

    command_name: ClassVar[str] = "UPDATE_TAX"

    id: str
    label: Optional[str] = Field(default=None, validation_alias=AliasChoices("label", "tax"))
    tax_type: Optional[Union[TaxType, str]] = Field(
        default=None, validation_alias=AliasChoices("tax_type", "taxType")
    )
    tax_per: Optional[Union[TaxPer, str]] = Field(
        default=None, validation_alias=AliasChoices("tax_per", "taxPer")
    )
    charge_value: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("charge_value", "chargeValue")
    )


class UpdateItemTax(BillingCommand):
    """
    Ручное переопределение строки ItemTax.

    Переопределяются только charge_value и total_amount. Копии полей
    позиции и налога (item_name, quantity, tax_type, ...) всегда берутся
    из Item / Tax: в полной строке таблицы они игнорируются.

    total_amount по формуле НЕ пересчитывается: переданное значение
    сохраняется, иначе остаётся прежнее. Переопределение стирается
    следующим UpdateItem / UpdateTax, затрагивающим строку.
    """

    command_name: ClassVar[str] = "UPDATE_ITEM_TAX"

    id: str
    charge_value: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("charge_value", "chargeValue")
    )
    total_amount: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("total_amount", "totalAmount")
    )


# =============================================================================
# DISPATCH TAGS
# =============================================================================


COMMAND_TYPES: dict[str, type[BillingCommand]] = {
    cls.command_name: cls for cls in (AddItem, AddTax, UpdateItem, UpdateTax, UpdateItemTax)
}


def parse_command(type_name: str, payload: Optional[dict[str, Any]] = None) -> BillingCommand:
    """
    Построение команды по строковому тегу (ADD_ITEM, UPDATE_TAX, ...).

    Лишние ключи payload игнорируются (например, amount или itemId
    в полной строке таблицы).

    Raises:
        ValueError: если тег неизвестен
        pydantic.ValidationError: если payload нельзя привести к типам команды
    """
    try:
        command_cls = COMMAND_TYPES[type_name]
    except KeyError:
        raise ValueError(
            f"Unknown command type {type_name!r}, expected one of {sorted(COMMAND_TYPES)}"
        )
    return command_cls.model_validate(payload or {})
