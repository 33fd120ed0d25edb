"""Billing Recalculation Engine — согласованный пересчёт позиций и налогов.

- Формула налога (percentage / amount / onUnit)
- Типизированные команды (AddItem, AddTax, UpdateItem, UpdateTax, UpdateItemTax)
- Чистый движок пересчёта и сессия-владелец снапшота
"""

from .commands import (
    COMMAND_TYPES,
    AddItem,
    AddTax,
    BillingCommand,
    UpdateItem,
    UpdateItemTax,
    UpdateTax,
    parse_command,
)
from .config import EngineConfig
from .exceptions import BillingEngineError, UnknownEntityError, UnknownTaxTypeError
from .recalculation import CommandResult, RecalculationEngine
from .session import BillingSession
from .tax_formula import calculate_tax_amount

__all__ = [
    "AddItem",
    "AddTax",
    "UpdateItem",
    "UpdateTax",
    "UpdateItemTax",
    "BillingCommand",
    "COMMAND_TYPES",
    "parse_command",
    "EngineConfig",
    "BillingEngineError",
    "UnknownEntityError",
    "UnknownTaxTypeError",
    "CommandResult",
    "RecalculationEngine",
    "BillingSession",
    "calculate_tax_amount",
]
