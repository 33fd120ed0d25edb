"""Recalculation Engine — пересчёт снапшота калькулятора счёта.

Чистая функция перехода: (snapshot, command) → новый snapshot.
Поддерживаемые команды: AddItem, AddTax, UpdateItem, UpdateTax, UpdateItemTax.

Инварианты после каждой команды:
- |item_taxes| = |items| × |taxes|, ровно одна строка на пару
- строка ItemTax = f(item, tax) на текущих значениях (кроме ручного override)
- Tax.total_amount = сумма строк этого налога
- Item.amount = quantity × rate
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from src.core.domain import BillingSnapshot, Item, ItemTax, Tax
from src.core.math.numerical_safeguards import sum_amounts

from .commands import AddItem, AddTax, BillingCommand, UpdateItem, UpdateItemTax, UpdateTax
from .config import EngineConfig
from .exceptions import UnknownEntityError, UnknownTaxTypeError
from .tax_formula import calculate_tax_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Результат применения команды."""

    snapshot: BillingSnapshot
    previous_version: int
    command_name: str

    # False если команда ссылалась на неизвестный id (no-op)
    applied: bool

    # Налоги, чей total_amount был пересчитан
    affected_tax_ids: tuple[str, ...]

    # Для отладки
    details: str


class RecalculationEngine:
    """Движок пересчёта items / taxes / item_taxes.

    Stateless относительно данных: снапшот передаётся и возвращается явно.
    Из конфигурации используются id_factory и strict;
    money_decimals читают view models при отображении.

    Неизвестный id в командах изменения → no-op (applied=False),
    версия снапшота при этом всё равно увеличивается.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Args:
            config: конфигурация движка (default EngineConfig())
        """
        self.config = config or EngineConfig()

    def apply(self, snapshot: BillingSnapshot, command: BillingCommand) -> CommandResult:
        """Применение произвольной команды.

        Raises:
            TypeError: если command не является известной командой
            UnknownEntityError / UnknownTaxTypeError: только в strict mode
        """
        if isinstance(command, AddItem):
            return self.add_item(snapshot, command)
        if isinstance(command, AddTax):
            return self.add_tax(snapshot, command)
        if isinstance(command, UpdateItem):
            return self.update_item(snapshot, command)
        if isinstance(command, UpdateTax):
            return self.update_tax(snapshot, command)
        if isinstance(command, UpdateItemTax):
            return self.update_item_tax(snapshot, command)
        raise TypeError(f"Unsupported command: {type(command).__name__}")

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def add_item(self, snapshot: BillingSnapshot, command: AddItem) -> CommandResult:
        """Новая позиция + по одной строке на каждый существующий налог."""
        item = Item(
            id=self.config.id_factory(),
            name=command.name,
            quantity=command.quantity,
            rate=command.rate,
            hsn=command.hsn,
        )
        new_rows = tuple(self._build_row(item, tax) for tax in snapshot.taxes)
        item_taxes = snapshot.item_taxes + new_rows
        taxes = self._recompute_tax_totals(snapshot.taxes, item_taxes)

        return self._create_result(
            snapshot=snapshot,
            command=command,
            items=snapshot.items + (item,),
            taxes=taxes,
            item_taxes=item_taxes,
            applied=True,
            affected_tax_ids=tuple(tax.id for tax in taxes),
            details=f"Item {item.id} added, amount={item.amount}, rows_created={len(new_rows)}",
        )

    def add_tax(self, snapshot: BillingSnapshot, command: AddTax) -> CommandResult:
        """Новый налог + по одной строке на каждую существующую позицию."""
        tax = Tax(
            id=self.config.id_factory(),
            label=command.label,
            tax_type=command.tax_type,
            tax_per=command.tax_per,
            charge_value=command.charge_value,
            total_amount=0.0,
        )
        self._check_tax_type(tax)
        new_rows = tuple(self._build_row(item, tax) for item in snapshot.items)
        tax = tax.model_copy(
            update={"total_amount": sum_amounts(row.total_amount for row in new_rows)}
        )

        return self._create_result(
            snapshot=snapshot,
            command=command,
            items=snapshot.items,
            taxes=snapshot.taxes + (tax,),
            item_taxes=snapshot.item_taxes + new_rows,
            applied=True,
            affected_tax_ids=(tax.id,),
            details=f"Tax {tax.id} added, total_amount={tax.total_amount}, rows_created={len(new_rows)}",
        )

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def update_item(self, snapshot: BillingSnapshot, command: UpdateItem) -> CommandResult:
        """Слияние полей позиции и пересинхронизация всех её строк."""
        item = snapshot.find_item(command.id)
        if item is None:
            return self._unknown_id(snapshot, command, "item")

        updated_item = item.model_copy(update=command.changes())
        items = self._replace(snapshot.items, updated_item)

        taxes_by_id = {tax.id: tax for tax in snapshot.taxes}
        affected: list[str] = []
        item_taxes = []
        for row in snapshot.item_taxes:
            tax = taxes_by_id.get(row.tax_id)
            if row.item_id == updated_item.id and tax is not None:
                row = self._sync_row(row, updated_item, tax)
                affected.append(tax.id)
            item_taxes.append(row)

        taxes = self._recompute_tax_totals(snapshot.taxes, item_taxes, only=affected)

        return self._create_result(
            snapshot=snapshot,
            command=command,
            items=items,
            taxes=taxes,
            item_taxes=tuple(item_taxes),
            applied=True,
            affected_tax_ids=tuple(affected),
            details=f"Item {updated_item.id} updated, amount={updated_item.amount}, rows_synced={len(affected)}",
        )

    def update_tax(self, snapshot: BillingSnapshot, command: UpdateTax) -> CommandResult:
        """Слияние полей налога и пересинхронизация всех его строк."""
        tax = snapshot.find_tax(command.id)
        if tax is None:
            return self._unknown_id(snapshot, command, "tax")

        updated_tax = tax.model_copy(update=command.changes())
        self._check_tax_type(updated_tax)

        items_by_id = {item.id: item for item in snapshot.items}
        synced = 0
        item_taxes = []
        for row in snapshot.item_taxes:
            item = items_by_id.get(row.item_id)
            if row.tax_id == updated_tax.id and item is not None:
                row = self._sync_row(row, item, updated_tax)
                synced += 1
            item_taxes.append(row)

        taxes = self._recompute_tax_totals(
            self._replace(snapshot.taxes, updated_tax), item_taxes, only=(updated_tax.id,)
        )

        return self._create_result(
            snapshot=snapshot,
            command=command,
            items=snapshot.items,
            taxes=taxes,
            item_taxes=tuple(item_taxes),
            applied=True,
            affected_tax_ids=(updated_tax.id,),
            details=f"Tax {updated_tax.id} updated, rows_synced={synced}",
        )

    def update_item_tax(self, snapshot: BillingSnapshot, command: UpdateItemTax) -> CommandResult:
        """Ручной override строки без пересчёта по формуле.

        total_amount строки берётся из команды или остаётся прежним;
        затем пересчитывается только сумма налога-владельца.
        """
        row = snapshot.find_item_tax(command.id)
        if row is None:
            return self._unknown_id(snapshot, command, "item_tax")

        updated_row = row.model_copy(update=command.changes())
        item_taxes = self._replace(snapshot.item_taxes, updated_row)
        taxes = self._recompute_tax_totals(snapshot.taxes, item_taxes, only=(updated_row.tax_id,))

        return self._create_result(
            snapshot=snapshot,
            command=command,
            items=snapshot.items,
            taxes=taxes,
            item_taxes=item_taxes,
            applied=True,
            affected_tax_ids=(updated_row.tax_id,),
            details=(
                f"ItemTax {updated_row.id} overridden, charge_value={updated_row.charge_value}, "
                f"total_amount={updated_row.total_amount}"
            ),
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _build_row(self, item: Item, tax: Tax) -> ItemTax:
        """Новая строка ItemTax для пары (item, tax)."""
        return ItemTax(
            id=self.config.id_factory(),
            item_id=item.id,
            tax_id=tax.id,
            tax_label=tax.label,
            item_name=item.name,
            quantity=item.quantity,
            tax_type=tax.tax_type,
            tax_per=tax.tax_per,
            charge_value=tax.charge_value,
            total_amount=calculate_tax_amount(item, tax, strict=self.config.strict),
        )

    def _sync_row(self, row: ItemTax, item: Item, tax: Tax) -> ItemTax:
        """Пересинхронизация денормализованных полей и пересчёт по формуле.

        Стирает ручной override charge_value / total_amount.
        """
        return row.model_copy(
            update={
                "tax_label": tax.label,
                "item_name": item.name,
                "quantity": item.quantity,
                "tax_type": tax.tax_type,
                "tax_per": tax.tax_per,
                "charge_value": tax.charge_value,
                "total_amount": calculate_tax_amount(item, tax, strict=self.config.strict),
            }
        )

    def _recompute_tax_totals(
        self,
        taxes: Iterable[Tax],
        item_taxes: Iterable[ItemTax],
        only: Optional[Iterable[str]] = None,
    ) -> tuple[Tax, ...]:
        """Tax.total_amount = сумма строк налога.

        Args:
            taxes: налоги
            item_taxes: все строки ItemTax
            only: id налогов для пересчёта (None = все)
        """
        amounts_by_tax: dict[str, list[float]] = {}
        for row in item_taxes:
            amounts_by_tax.setdefault(row.tax_id, []).append(row.total_amount)

        targets = None if only is None else set(only)
        return tuple(
            tax.model_copy(update={"total_amount": sum_amounts(amounts_by_tax.get(tax.id, ()))})
            if targets is None or tax.id in targets
            else tax
            for tax in taxes
        )

    def _check_tax_type(self, tax: Tax) -> None:
        """strict mode: нераспознанный tax_type отклоняется сразу, а не при расчёте строк."""
        if self.config.strict and not tax.is_recognized:
            raise UnknownTaxTypeError(tax.id, tax.tax_type)

    @staticmethod
    def _replace(entities, updated):
        """Замена сущности по id с сохранением позиции."""
        return tuple(updated if entity.id == updated.id else entity for entity in entities)

    def _unknown_id(
        self, snapshot: BillingSnapshot, command: BillingCommand, entity: str
    ) -> CommandResult:
        """No-op для неизвестного id (или исключение в strict mode)."""
        entity_id = getattr(command, "id", "")
        if self.config.strict:
            raise UnknownEntityError(entity, entity_id)

        logger.info("%s ignored: unknown %s id %r", command.command_name, entity, entity_id)
        return self._create_result(
            snapshot=snapshot,
            command=command,
            items=snapshot.items,
            taxes=snapshot.taxes,
            item_taxes=snapshot.item_taxes,
            applied=False,
            affected_tax_ids=(),
            details=f"Unknown {entity} id {entity_id!r}, snapshot unchanged",
        )

    def _create_result(
        self,
        snapshot: BillingSnapshot,
        command: BillingCommand,
        items: tuple[Item, ...],
        taxes: tuple[Tax, ...],
        item_taxes: tuple[ItemTax, ...],
        applied: bool,
        affected_tax_ids: tuple[str, ...],
        details: str,
    ) -> CommandResult:
        """Создание результата с новым снапшотом (version + 1)."""
        new_snapshot = BillingSnapshot(
            version=snapshot.version + 1,
            items=items,
            taxes=taxes,
            item_taxes=item_taxes,
        )
        logger.debug(
            "%s applied=%s v%d→v%d items=%d taxes=%d item_taxes=%d",
            command.command_name,
            applied,
            snapshot.version,
            new_snapshot.version,
            len(new_snapshot.items),
            len(new_snapshot.taxes),
            len(new_snapshot.item_taxes),
        )
        return CommandResult(
            snapshot=new_snapshot,
            previous_version=snapshot.version,
            command_name=command.command_name,
            applied=applied,
            affected_tax_ids=affected_tax_ids,
            details=details,
        )
