"""
Формула налога f(item, tax) → вклад налога в позицию.

- percentage: (quantity × rate) × charge_value / 100
- amount:     charge_value (фиксированно, не зависит от позиции)
- onUnit:     quantity × charge_value
- иное:       0.0 (fail-soft)

tax_per на формулу не влияет.
"""

import logging

from src.core.domain import Item, Tax, TaxType
from src.core.math.numerical_safeguards import sanitize_float

from .exceptions import UnknownTaxTypeError

logger = logging.getLogger(__name__)


def calculate_tax_amount(item: Item, tax: Tax, strict: bool = False) -> float:
    """
    Вклад налога tax в позицию item.

    Args:
        item: Позиция (текущие значения)
        tax: Налог (текущие значения)
        strict: Выбросить UnknownTaxTypeError для нераспознанного tax_type

    Returns:
        Конечный float (NaN/Inf → 0.0)

    Raises:
        UnknownTaxTypeError: если strict и tax_type не распознан

    Examples:
        >>> item = Item(id="i1", quantity=2, rate=100)
        >>> calculate_tax_amount(item, Tax(id="t1", tax_type="percentage", charge_value=18))
        36.0
        >>> calculate_tax_amount(item, Tax(id="t2", tax_type="amount", charge_value=50))
        50.0
    """
    base_amount = item.quantity * item.rate

    if tax.tax_type == TaxType.PERCENTAGE:
        amount = base_amount * tax.charge_value / 100
    elif tax.tax_type == TaxType.AMOUNT:
        amount = tax.charge_value
    elif tax.tax_type == TaxType.ON_UNIT:
        amount = item.quantity * tax.charge_value
    else:
        if strict:
            raise UnknownTaxTypeError(tax.id, tax.tax_type)
        logger.debug("Unrecognized tax_type %r on tax %s, contribution is 0", tax.tax_type, tax.id)
        amount = 0.0

    return sanitize_float(float(amount))
