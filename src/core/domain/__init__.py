"""
Domain models and value objects.

Contains fundamental billing entities: Item, Tax, ItemTax, BillingSnapshot.
"""

from src.core.domain.item import Item
from src.core.domain.item_tax import ItemTax
from src.core.domain.snapshot import BillingSnapshot
from src.core.domain.tax import (
    Tax,
    TaxPer,
    TaxType,
    normalize_tax_per,
    normalize_tax_type,
)

__all__ = [
    # Item model
    "Item",
    # Tax model
    "Tax",
    "TaxType",
    "TaxPer",
    "normalize_tax_type",
    "normalize_tax_per",
    # Association
    "ItemTax",
    # Snapshot
    "BillingSnapshot",
]
