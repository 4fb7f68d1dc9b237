"""
Тесты для Bivariate Statistics — covariance и correlation_coefficient

Проверяемые инварианты:
1. Валидация формы: LENGTH_MISMATCH, затем INSUFFICIENT_DATA
2. Пропагация ошибок подвычислений без изменений (first failure wins)
3. Симметрия covariance и correlation_coefficient
4. r(x, x) = 1 для непостоянного x
5. NEGATIVE_RADICAND и ZERO_DENOMINATOR
6. Эталонные сценарии на рядах доходностей
"""

import logging
from decimal import Decimal

import pytest

from statlib.core.config import StatisticsConfig
from statlib.core.domain import StatErrorKind
from statlib.core.math import (
    correlation_coefficient,
    covariance,
    raw_deviation_denominator_part,
    sum_product,
    sum_squared,
    sum_values,
)

TOLERANCE = 1e-10

RETURNS_A = [0.07, 0.09, 0.10]
RETURNS_B = [0.085, 0.07, 0.095]
RETURNS_C = [0.12, 0.11, 0.10]

RETURNS_X = [-0.10, -0.05, 0.00, 0.08, 0.14, 0.20, 0.25]
MARKET_RETURNS = [-0.20, -0.10, -0.05, 0.00, 0.10, 0.20, 0.30]

PROFITS = [
    300, 9_300, 20_900, 31_000, 41_400,
    47_700, 60_800, 79_500, 80_400, 89_000,
    118_300, 119_700, 153_000, 252_800, 333_300,
    412_000, 424_300, 454_000, 829_000, 86_500,
    176_000, 227_400, 471_300, 681_100, 747_000,
    859_800, 939_500, 1_082_000, 1_102_200, 1_495_400,
]
EMPLOYERS = [
    7_523, 8_200, 12_068, 9_500, 5_000,
    18_000, 4_708, 13_740, 95_000, 8_200,
    56_000, 31_404, 8_578, 2_900, 9_100,
    10_200, 9_548, 82_300, 28_334, 40_929,
    50_816, 54_100, 28_200, 83_100, 3_418,
    34_400, 42_100, 8_527, 21_300, 20_100,
]


# =============================================================================
# ТЕСТЫ: raw_deviation_denominator_part
# =============================================================================


class TestRawDeviationDenominatorPart:
    """Тесты sqrt(n·Σx² − (Σx)²)"""

    def test_basic(self) -> None:
        """x = {1,2,3}: sqrt(3·14 − 36) = sqrt(6)"""
        result = raw_deviation_denominator_part(Decimal(6), Decimal(14), 3)
        assert result.is_ok
        assert float(result.value) == pytest.approx(6 ** 0.5)

    def test_zero_radicand(self) -> None:
        """Постоянный ряд → 0, не ошибка"""
        result = raw_deviation_denominator_part(Decimal(15), Decimal(75), 3)
        assert result.value == 0

    def test_negative_radicand(self) -> None:
        """Отрицательный radicand → NEGATIVE_RADICAND с полным контекстом"""
        result = raw_deviation_denominator_part(Decimal(10), Decimal(1), 3)
        assert result.error.kind == StatErrorKind.NEGATIVE_RADICAND
        assert result.error.context == {
            "n": 3,
            "sum": Decimal(10),
            "sum_squared": Decimal(1),
            "radicand": Decimal(-97),
        }
        message = result.error.message
        assert "-97" in message
        assert "n=3" in message
        assert "sum=10" in message
        assert "sum_squared=1" in message

    def test_non_positive_n(self) -> None:
        result = raw_deviation_denominator_part(Decimal(0), Decimal(0), 0)
        assert result.error.kind == StatErrorKind.INSUFFICIENT_DATA

    @pytest.mark.parametrize(
        "total, total_squared",
        [
            (Decimal(1), Decimal("-Infinity")),
            (Decimal("Infinity"), Decimal(1)),
            (Decimal("NaN"), Decimal(1)),
        ],
    )
    def test_non_finite_sums_returned_as_error(self, total, total_squared) -> None:
        """Бесконечные/NaN суммы → NON_FINITE_INPUT, а не исключение"""
        result = raw_deviation_denominator_part(total, total_squared, 3)
        assert result.error.kind == StatErrorKind.NON_FINITE_INPUT
        assert result.error.context == {"n": 3}


# =============================================================================
# ТЕСТЫ: covariance
# =============================================================================


class TestCovariance:
    """Тесты выборочной ковариации"""

    def test_simple(self) -> None:
        assert covariance([1, 2, 3], [2, 4, 6]).value == 2

    def test_titres_x_vs_market(self) -> None:
        """Ковариация доходностей бумаги X и рынка"""
        result = covariance(RETURNS_X, MARKET_RETURNS)
        assert result.is_ok
        assert float(result.value) == pytest.approx(0.022571428571428576, abs=TOLERANCE)

    def test_symmetric(self) -> None:
        assert covariance(RETURNS_X, MARKET_RETURNS).value == covariance(
            MARKET_RETURNS, RETURNS_X
        ).value
        assert covariance(PROFITS, EMPLOYERS).value == covariance(EMPLOYERS, PROFITS).value

    def test_variance_of_self(self) -> None:
        """cov(x, x) — выборочная дисперсия"""
        values = [2, 4, 4, 4, 5, 5, 7, 9]
        result = covariance(values, values)
        assert float(result.value) == pytest.approx(32 / 7, abs=1e-15)

    def test_length_mismatch(self) -> None:
        result = covariance([1, 2, 3], [1, 2])
        assert result.error.kind == StatErrorKind.LENGTH_MISMATCH
        assert result.error.context == {"len_x": 3, "len_y": 2}

    def test_length_mismatch_before_insufficient(self) -> None:
        result = covariance([1], [1, 2])
        assert result.error.kind == StatErrorKind.LENGTH_MISMATCH

    @pytest.mark.parametrize("xs, ys", [([], []), ([1.0], [2.0])])
    def test_insufficient_data(self, xs, ys) -> None:
        """n < 2: делитель n − 1 не определён"""
        result = covariance(xs, ys)
        assert result.error.kind == StatErrorKind.INSUFFICIENT_DATA
        assert result.error.context == {"n": len(xs)}

    def test_non_finite_input(self) -> None:
        result = covariance([1.0, float("nan"), 3.0], [1.0, 2.0, 3.0])
        assert result.error.kind == StatErrorKind.NON_FINITE_INPUT
        assert result.error.context == {"index": 1}

    def test_sum_product_failure_propagated_verbatim(self) -> None:
        """NEGATIVE_RESULT из sum_product возвращается без изменений"""
        xs, ys = [1, 2, 3], [-1, -2, -3]
        result = covariance(xs, ys)
        assert result.error.kind == StatErrorKind.NEGATIVE_RESULT
        assert result.error == sum_product(xs, ys).error

    def test_negative_covariance_when_policy_disabled(self) -> None:
        config = StatisticsConfig(reject_negative_sum_product=False)
        assert covariance([1, 2, 3], [-1, -2, -3], config).value == -1


# =============================================================================
# ТЕСТЫ: correlation_coefficient
# =============================================================================


class TestCorrelationCoefficient:
    """Тесты коэффициента корреляции Пирсона"""

    def test_returns_a_b(self) -> None:
        result = correlation_coefficient(RETURNS_A, RETURNS_B)
        assert result.is_ok
        assert float(result.value) == pytest.approx(0.21677749238102959, abs=TOLERANCE)

    def test_returns_a_c(self) -> None:
        result = correlation_coefficient(RETURNS_A, RETURNS_C)
        assert float(result.value) == pytest.approx(-0.9819805060619121, abs=TOLERANCE)

    def test_returns_b_c(self) -> None:
        result = correlation_coefficient(RETURNS_B, RETURNS_C)
        assert float(result.value) == pytest.approx(-0.39735970711947155, abs=TOLERANCE)

    def test_profits_vs_employers(self) -> None:
        """30 целочисленных точек с суммами порядка миллионов"""
        result = correlation_coefficient(PROFITS, EMPLOYERS)
        assert result.is_ok
        assert float(result.value) == pytest.approx(0.05881462738716168, abs=TOLERANCE)

    @pytest.mark.parametrize(
        "xs, ys",
        [
            (RETURNS_A, RETURNS_B),
            (RETURNS_A, RETURNS_C),
            (RETURNS_X, MARKET_RETURNS),
            (PROFITS, EMPLOYERS),
        ],
    )
    def test_symmetric(self, xs, ys) -> None:
        assert correlation_coefficient(xs, ys).value == correlation_coefficient(ys, xs).value

    @pytest.mark.parametrize("xs", [RETURNS_A, RETURNS_X, PROFITS, [1, 2]])
    def test_self_correlation_is_one(self, xs) -> None:
        assert float(correlation_coefficient(xs, xs).value) == pytest.approx(1.0, abs=1e-12)

    def test_perfect_negative_when_policy_disabled(self) -> None:
        config = StatisticsConfig(reject_negative_sum_product=False)
        result = correlation_coefficient([1, 2, 3], [-1, -2, -3], config)
        assert float(result.value) == pytest.approx(-1.0, abs=1e-12)

    def test_bounded(self) -> None:
        for xs, ys in [(RETURNS_A, RETURNS_B), (RETURNS_B, RETURNS_C), (PROFITS, EMPLOYERS)]:
            assert -1 <= correlation_coefficient(xs, ys).value <= 1

    def test_length_mismatch(self) -> None:
        result = correlation_coefficient(RETURNS_A, RETURNS_X)
        assert result.error.kind == StatErrorKind.LENGTH_MISMATCH
        assert "len_x=3" in result.error.message
        assert "len_y=7" in result.error.message

    @pytest.mark.parametrize("xs, ys", [([], []), ([0.5], [0.7])])
    def test_insufficient_data(self, xs, ys) -> None:
        result = correlation_coefficient(xs, ys)
        assert result.error.kind == StatErrorKind.INSUFFICIENT_DATA

    def test_non_finite_input(self) -> None:
        result = correlation_coefficient([1.0, 2.0], [float("inf"), 1.0])
        assert result.error.kind == StatErrorKind.NON_FINITE_INPUT

    @pytest.mark.parametrize(
        "xs, ys",
        [
            ([5, 5, 5], [1, 2, 3]),
            ([1, 2, 3], [2.5, 2.5, 2.5]),
            ([4, 4], [4, 4]),
        ],
    )
    def test_constant_series_zero_denominator(self, xs, ys) -> None:
        """Нулевая дисперсия → ZERO_DENOMINATOR"""
        result = correlation_coefficient(xs, ys)
        assert result.error.kind == StatErrorKind.ZERO_DENOMINATOR
        assert result.error.context["n"] == len(xs)

    @pytest.mark.parametrize("value", [0.1, 0.07, 0.3, 1.1, 0.095, 123.456])
    @pytest.mark.parametrize("n", [2, 3, 7, 30])
    def test_constant_float_series_zero_denominator(self, value: float, n: int) -> None:
        """
        Постоянный float-ряд: точное значение длиннее 34 цифр, округлённый
        radicand может выйти любого знака, но ответ всегда ZERO_DENOMINATOR.
        """
        result = correlation_coefficient([value] * n, range(1, n + 1))
        assert result.error.kind == StatErrorKind.ZERO_DENOMINATOR
        assert "constant series x" in result.error.message

    def test_constant_float_series_in_y(self) -> None:
        result = correlation_coefficient([0.07, 0.09, 0.10], [0.1] * 3)
        assert result.error.kind == StatErrorKind.ZERO_DENOMINATOR
        assert "constant series y" in result.error.message

    def test_sum_product_failure_propagated_verbatim(self) -> None:
        xs, ys = [1, 2, 3], [-1, -2, -3]
        result = correlation_coefficient(xs, ys)
        assert result.error == sum_product(xs, ys).error

    def test_negative_radicand_propagated_verbatim(self) -> None:
        """
        При precision=2 Σx² для {8,9,9} округляется до 220, а (Σx)² = 676 до 680:
        radicand 3·220 − 680 < 0 (точное значение 3·226 − 676 = 2).
        """
        config = StatisticsConfig(precision=2)
        xs, ys = [8, 9, 9], [1, 2, 3]

        result = correlation_coefficient(xs, ys, config)

        assert result.error.kind == StatErrorKind.NEGATIVE_RADICAND
        assert result.error.context["radicand"] < 0
        expected = raw_deviation_denominator_part(
            sum_values(xs, config), sum_squared(xs, config), 3, config
        )
        assert result.error == expected.error

    def test_same_data_succeeds_at_default_precision(self) -> None:
        """r = 3 / sqrt(2·6) = sqrt(3)/2"""
        result = correlation_coefficient([8, 9, 9], [1, 2, 3])
        assert float(result.value) == pytest.approx(3 ** 0.5 / 2, abs=1e-15)

    def test_failure_logged_at_debug(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="statlib")
        correlation_coefficient([1, 2, 3], [1, 2])
        assert any("LENGTH_MISMATCH" in r.getMessage() for r in caplog.records)
