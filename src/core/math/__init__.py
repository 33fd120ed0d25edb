"""
Core math modules для billing engine

Численные примитивы с гарантией стабильности.
"""

from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    MONEY_DECIMALS_DEFAULT,
    # NaN/Inf sanitization
    coerce_number,
    is_valid_float,
    sanitize_float,
    # Epsilon comparisons
    is_close,
    is_zero,
    # Aggregation and rounding
    format_money,
    round_money,
    sum_amounts,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "MONEY_DECIMALS_DEFAULT",
    # Numerical Safeguards — NaN/Inf sanitization
    "coerce_number",
    "is_valid_float",
    "sanitize_float",
    # Numerical Safeguards — Epsilon comparisons
    "is_close",
    "is_zero",
    # Numerical Safeguards — Aggregation and rounding
    "format_money",
    "round_money",
    "sum_amounts",
]
