"""
Presentation boundary.

Приведение ввода форм к командам и строки таблиц для отображения.
Рендеринг (виджеты, стили) сюда не входит.
"""

from .forms import item_edit_form, item_form, item_tax_edit_form, tax_edit_form, tax_form
from .view_models import (
    ItemRowView,
    ItemTaxRowView,
    TaxRowView,
    TotalsView,
    item_rows,
    item_tax_rows,
    tax_per_label,
    tax_rows,
    tax_type_label,
    totals_row,
)

__all__ = [
    # Forms
    "item_form",
    "tax_form",
    "item_edit_form",
    "tax_edit_form",
    "item_tax_edit_form",
    # View models
    "ItemRowView",
    "TaxRowView",
    "ItemTaxRowView",
    "TotalsView",
    "item_rows",
    "tax_rows",
    "item_tax_rows",
    "totals_row",
    "tax_type_label",
    "tax_per_label",
]
