"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. NaN/Inf санитизацию
2. Приведение сырого ввода к числу
3. Epsilon-сравнения float
4. Суммирование и округление денежных сумм
"""

import math

import pytest

from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    coerce_number,
    format_money,
    is_close,
    is_valid_float,
    is_zero,
    round_money,
    sanitize_float,
    sum_amounts,
)

# =============================================================================
# ТЕСТЫ NaN/Inf САНИТИЗАЦИИ
# =============================================================================


class TestSanitizeFloat:
    """Тесты для is_valid_float / sanitize_float"""

    def test_finite_values_are_valid(self) -> None:
        assert is_valid_float(0.0)
        assert is_valid_float(-36.5)

    def test_nan_and_inf_are_invalid(self) -> None:
        assert not is_valid_float(float("nan"))
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))

    def test_valid_value_unchanged(self) -> None:
        assert sanitize_float(36.0) == 36.0

    def test_nan_replaced_with_fallback(self) -> None:
        assert sanitize_float(float("nan")) == 0.0
        assert sanitize_float(float("-inf"), fallback=-1.0) == -1.0


# =============================================================================
# ТЕСТЫ ПРИВЕДЕНИЯ ВВОДА
# =============================================================================


class TestCoerceNumber:
    """Тесты для coerce_number (семантика числового поля формы)"""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("12.5", 12.5),
            ("  4 ", 4.0),
            ("-3", -3.0),
            ("1e2", 100.0),
            (7, 7.0),
            (2.5, 2.5),
        ],
    )
    def test_numeric_input(self, raw, expected) -> None:
        assert coerce_number(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_input_is_zero(self, raw) -> None:
        assert coerce_number(raw) == 0.0

    def test_unparsable_text_uses_fallback(self) -> None:
        assert coerce_number("abc") == 0.0
        assert coerce_number("12abc", fallback=-1.0) == -1.0

    def test_nan_and_inf_text_uses_fallback(self) -> None:
        assert coerce_number("nan") == 0.0
        assert coerce_number("inf") == 0.0
        assert coerce_number(float("nan")) == 0.0

    def test_bool_coerces_to_one_or_zero(self) -> None:
        assert coerce_number(True) == 1.0
        assert coerce_number(False) == 0.0

    def test_result_is_always_finite(self) -> None:
        for raw in ["", "x", "inf", "-inf", "nan", None, "1.5", 3]:
            assert math.isfinite(coerce_number(raw))


# =============================================================================
# ТЕСТЫ EPSILON-СРАВНЕНИЙ
# =============================================================================


class TestIsClose:
    """Тесты для is_close / is_zero"""

    def test_float_rounding_noise_is_close(self) -> None:
        assert is_close(0.1 + 0.2, 0.3)

    def test_cent_difference_is_not_close(self) -> None:
        assert not is_close(36.0, 36.01)

    def test_is_zero_within_tolerance(self) -> None:
        assert is_zero(EPS_FLOAT_COMPARE_ABS / 2)
        assert not is_zero(0.001)


# =============================================================================
# ТЕСТЫ СУММИРОВАНИЯ И ОКРУГЛЕНИЯ
# =============================================================================


class TestSumAmounts:
    """Тесты для sum_amounts"""

    def test_empty_sum_is_zero(self) -> None:
        assert sum_amounts([]) == 0.0

    def test_sum_is_order_independent(self) -> None:
        values = [0.1, 1e10, 0.2, -1e10, 0.3]
        assert sum_amounts(values) == sum_amounts(reversed(values))

    def test_accepts_generator(self) -> None:
        assert sum_amounts(x * 1.5 for x in range(3)) == 4.5


class TestRoundMoney:
    """Тесты для round_money / format_money"""

    def test_half_up_rounding(self) -> None:
        """Округляется repr: 2.675 → 2.68, хотя двоичный float чуть меньше 2.675"""
        assert round_money(2.675) == 2.68
        assert round_money(0.125) == 0.13

    def test_custom_decimals(self) -> None:
        assert round_money(1.23456, decimals=3) == 1.235
        assert round_money(1.5, decimals=0) == 2.0

    def test_negative_decimals_rejected(self) -> None:
        with pytest.raises(ValueError, match="decimals must be non-negative"):
            round_money(1.0, decimals=-1)

    def test_format_money_fixed_digits(self) -> None:
        assert format_money(36) == "36.00"
        assert format_money(72.005) == "72.01"
        assert format_money(float("nan")) == "0.00"
