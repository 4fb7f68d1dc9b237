"""
Bivariate Statistics — Sample Covariance & Pearson Correlation

Композиция аккумуляторов в две основные статистики пары рядов:
- raw_deviation_denominator_part: sqrt(n·Σx² − (Σx)²), половина знаменателя r
- covariance: выборочная ковариация (делитель n − 1)
- correlation_coefficient: коэффициент корреляции Пирсона

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждая операция сама валидирует форму входа (длины, n ≥ 2)
2. Ошибка подвычисления возвращается без изменений (first failure wins)
3. Отрицательный radicand не маскируется clamp-ом, а возвращается как ошибка
4. Постоянный ряд (нулевая дисперсия) → ZERO_DENOMINATOR

ФОРМУЛЫ:
    cov(x, y) = (Σxy − Σx·Σy / n) / (n − 1)

                      n·Σxy − Σx·Σy
    r(x, y) = ─────────────────────────────────────────
              sqrt(n·Σx² − (Σx)²) · sqrt(n·Σy² − (Σy)²)
"""

import logging
from decimal import Decimal
from typing import Final

from statlib.core.config import DEFAULT_CONFIG, StatisticsConfig
from statlib.core.domain.result import StatErrorKind, StatResult
from statlib.core.math.accumulators import (
    check_finite_pair,
    sum_product,
    sum_squared,
    sum_values,
)
from statlib.core.math.high_precision import (
    NumericSequence,
    high_precision,
    is_finite_value,
    widen,
    widen_all,
)

logger = logging.getLogger(__name__)

# Минимальная длина выборки для covariance/correlation (делитель n − 1)
MIN_SAMPLE_SIZE: Final[int] = 2


# =============================================================================
# DEVIATION TERM
# =============================================================================


def raw_deviation_denominator_part(
    total: Decimal,
    total_squared: Decimal,
    n: int,
    config: StatisticsConfig | None = None,
) -> StatResult:
    """
    Половина знаменателя корреляции: sqrt(n·Σx² − (Σx)²).

    Radicand неотрицателен по неравенству Коши–Буняковского, но
    катастрофическое сокращение на плохо обусловленных данных (большая Σx,
    плотно сгруппированные значения) может сделать его слегка отрицательным.

    Args:
        total: Σx
        total_squared: Σx²
        n: Число элементов
        config: Конфигурация точности

    Returns:
        StatResult с корнем или ошибкой NEGATIVE_RADICAND / INSUFFICIENT_DATA /
        NON_FINITE_INPUT

    Examples:
        >>> raw_deviation_denominator_part(Decimal(6), Decimal(14), 3).value
        Decimal('2.449489742783178098197284074705891')
    """
    if n < 1:
        return _fail(
            StatErrorKind.INSUFFICIENT_DATA,
            f"raw_deviation_denominator_part: n must be >= 1, got n={n}",
            n=n,
        )

    if not (is_finite_value(total) and is_finite_value(total_squared)):
        return _fail(
            StatErrorKind.NON_FINITE_INPUT,
            f"raw_deviation_denominator_part: non-finite sums "
            f"(n={n}, sum={total}, sum_squared={total_squared})",
            n=n,
        )

    with high_precision(config):
        total, total_squared = widen(total), widen(total_squared)
        radicand = n * total_squared - total * total
        if radicand < 0:
            return _fail(
                StatErrorKind.NEGATIVE_RADICAND,
                f"raw_deviation_denominator_part: negative radicand {radicand} "
                f"(n={n}, sum={total}, sum_squared={total_squared})",
                n=n,
                sum=total,
                sum_squared=total_squared,
                radicand=radicand,
            )
        return StatResult.success(radicand.sqrt())


# =============================================================================
# COVARIANCE
# =============================================================================


def covariance(
    xs: NumericSequence,
    ys: NumericSequence,
    config: StatisticsConfig | None = None,
) -> StatResult:
    """
    Выборочная ковариация двух рядов.

    Порядок проверок:
    1. LENGTH_MISMATCH — длины различаются
    2. INSUFFICIENT_DATA — n < 2 (делитель n − 1)
    3. NON_FINITE_INPUT — элемент NaN/Inf
    4. Ошибки sum_product пропагируются без изменений

    Returns:
        StatResult с (Σxy − Σx·Σy/n) / (n − 1) или ошибкой

    Examples:
        >>> covariance([1, 2, 3], [2, 4, 6]).value
        Decimal('2')
    """
    cfg = config or DEFAULT_CONFIG

    shape_error = _check_pair_shape(xs, ys, "covariance")
    if shape_error is not None:
        return shape_error

    n = len(xs)
    sum_x = sum_values(xs, cfg)
    sum_y = sum_values(ys, cfg)

    sum_xy = sum_product(xs, ys, cfg)
    if not sum_xy.is_ok:
        return sum_xy

    with high_precision(cfg):
        return StatResult.success((sum_xy.value - sum_x * sum_y / n) / (n - 1))


# =============================================================================
# CORRELATION
# =============================================================================


def correlation_coefficient(
    xs: NumericSequence,
    ys: NumericSequence,
    config: StatisticsConfig | None = None,
) -> StatResult:
    """
    Коэффициент корреляции Пирсона.

    Порядок проверок:
    1. LENGTH_MISMATCH / INSUFFICIENT_DATA / NON_FINITE_INPUT
    2. Ошибка sum_product
    3. ZERO_DENOMINATOR — один из рядов постоянный (точное сравнение элементов)
    4. Ошибка знаменателя по x, затем по y (NEGATIVE_RADICAND)
    5. ZERO_DENOMINATOR — произведение знаменателей равно нулю

    Returns:
        StatResult с r ∈ [-1, 1] (с точностью до округления) или ошибкой

    Examples:
        >>> r = correlation_coefficient([0.07, 0.09, 0.10], [0.12, 0.11, 0.10])
        >>> round(float(r.value), 10)
        -0.9819805061
    """
    cfg = config or DEFAULT_CONFIG

    shape_error = _check_pair_shape(xs, ys, "correlation_coefficient")
    if shape_error is not None:
        return shape_error

    n = len(xs)
    sum_x = sum_values(xs, cfg)
    sum_y = sum_values(ys, cfg)
    sum_x2 = sum_squared(xs, cfg)
    sum_y2 = sum_squared(ys, cfg)

    sum_xy = sum_product(xs, ys, cfg)
    if not sum_xy.is_ok:
        return sum_xy

    with high_precision(cfg):
        numerator = n * sum_xy.value - sum_x * sum_y

    # Нулевой разброс определяется точно, до округлённого radicand
    for name, values in (("x", xs), ("y", ys)):
        if _is_constant(values, cfg):
            return _fail(
                StatErrorKind.ZERO_DENOMINATOR,
                f"correlation_coefficient: zero denominator, constant series {name} "
                f"(n={n})",
                n=n,
            )

    denominator_x = raw_deviation_denominator_part(sum_x, sum_x2, n, cfg)
    if not denominator_x.is_ok:
        return denominator_x

    denominator_y = raw_deviation_denominator_part(sum_y, sum_y2, n, cfg)
    if not denominator_y.is_ok:
        return denominator_y

    with high_precision(cfg):
        denominator = denominator_x.value * denominator_y.value
        if denominator == 0:
            return _fail(
                StatErrorKind.ZERO_DENOMINATOR,
                f"correlation_coefficient: zero denominator, constant series "
                f"(n={n}, denominator_x={denominator_x.value}, "
                f"denominator_y={denominator_y.value})",
                n=n,
                denominator_x=denominator_x.value,
                denominator_y=denominator_y.value,
            )
        return StatResult.success(numerator / denominator)


# =============================================================================
# HELPERS
# =============================================================================


def _check_pair_shape(
    xs: NumericSequence, ys: NumericSequence, operation: str
) -> StatResult | None:
    len_x, len_y = len(xs), len(ys)

    if len_x != len_y:
        return _fail(
            StatErrorKind.LENGTH_MISMATCH,
            f"{operation}: sequence lengths differ (len_x={len_x}, len_y={len_y})",
            len_x=len_x,
            len_y=len_y,
        )

    if len_x < MIN_SAMPLE_SIZE:
        return _fail(
            StatErrorKind.INSUFFICIENT_DATA,
            f"{operation}: need at least {MIN_SAMPLE_SIZE} points, got n={len_x}",
            n=len_x,
        )

    return check_finite_pair(xs, ys, operation)


def _is_constant(values: NumericSequence, config: StatisticsConfig) -> bool:
    """Все расширенные элементы равны (сравнение точное, без округления)."""
    with high_precision(config):
        widened = widen_all(values)
        first = next(widened)
        return all(value == first for value in widened)


def _fail(kind: StatErrorKind, message: str, **context) -> StatResult:
    logger.debug("%s: %s", kind.value, message)
    return StatResult.failure(kind, message, **context)
