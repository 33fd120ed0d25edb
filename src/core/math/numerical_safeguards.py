"""
Numerical Safeguards — Safe Math Primitives для биллинга

Модуль обеспечивает численную устойчивость расчётов позиций и налогов:
- NaN/Inf санитизация для предотвращения распространения невалидных значений
- Приведение "сырого" пользовательского ввода к числу (семантика unary plus)
- Epsilon-защиты для сравнений float с учётом машинной точности
- Округление денежных сумм для отображения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не пропагируют в снапшот (заменяются на fallback)
2. Приведение ввода тотально: любой вход даёт конечный float
3. Float сравнения всегда учитывают машинную точность
4. Округление применяется только для отображения, не для хранения
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Final, Iterable

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
# Денежные суммы сравниваются с точностью много выше одной копейки
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-9

# Количество знаков после запятой для отображения денежных сумм
MONEY_DECIMALS_DEFAULT: Final[int] = 2


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Санитизация float: замена NaN/Inf на fallback значение.

    Args:
        value: Исходное значение
        fallback: Значение для замены NaN/Inf (default: 0.0)

    Returns:
        value если валидное, иначе fallback

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


def coerce_number(raw: object, fallback: float = 0.0) -> float:
    """
    Приведение сырого ввода (текст поля, число, None) к конечному float.

    Повторяет поведение числового поля формы: пустая строка и пробелы
    дают 0, нечисловой текст и NaN/Inf дают fallback.

    Args:
        raw: Значение из поля ввода
        fallback: Значение при невозможности приведения (default: 0.0)

    Returns:
        Конечный float

    Examples:
        >>> coerce_number("12.5")
        12.5
        >>> coerce_number("")
        0.0
        >>> coerce_number("abc")
        0.0
        >>> coerce_number(None)
        0.0
    """
    if raw is None:
        return fallback
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, (int, float)):
        return sanitize_float(float(raw), fallback=fallback)

    text = str(raw).strip()
    if not text:
        return 0.0

    try:
        value = float(text)
    except ValueError:
        return fallback

    return sanitize_float(value, fallback=fallback)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Examples:
        >>> is_close(0.1 + 0.2, 0.3)
        True
        >>> is_close(36.0, 36.01)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def is_zero(value: float, tol: float = EPS_FLOAT_COMPARE_ABS) -> bool:
    """Проверка, близко ли значение к нулю с учётом толерантности."""
    return abs(value) <= tol


# =============================================================================
# АГРЕГАЦИЯ И ОКРУГЛЕНИЕ
# =============================================================================


def sum_amounts(values: Iterable[float]) -> float:
    """
    Сумма денежных значений с компенсацией ошибок округления.

    Использует math.fsum, поэтому порядок слагаемых не влияет на результат
    (важно для независимости итогов от порядка добавления позиций).

    Args:
        values: Значения для суммирования

    Returns:
        Санитизированная сумма (0.0 для пустого входа)
    """
    return sanitize_float(math.fsum(values))


def round_money(value: float, decimals: int = MONEY_DECIMALS_DEFAULT) -> float:
    """
    Округление денежной суммы для отображения (ROUND_HALF_UP).

    Округляется десятичное представление repr(value), а не точное
    двоичное значение: 2.675 → 2.68 (JS toFixed(2) даёт 2.67).

    Args:
        value: Исходное значение
        decimals: Количество знаков после запятой (>= 0)

    Returns:
        Округлённое значение

    Raises:
        ValueError: если decimals < 0

    Examples:
        >>> round_money(2.675)
        2.68
        >>> round_money(36.0)
        36.0
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(repr(sanitize_float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def format_money(value: float, decimals: int = MONEY_DECIMALS_DEFAULT) -> str:
    """
    Форматирование денежной суммы с фиксированным числом знаков.

    Examples:
        >>> format_money(36)
        '36.00'
        >>> format_money(float('nan'))
        '0.00'
    """
    return f"{round_money(value, decimals):.{decimals}f}"
