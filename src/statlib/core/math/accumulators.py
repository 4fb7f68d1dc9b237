"""
Accumulators — Sequence Reductions

Одно- и двухпоследовательные свёртки на high-precision аккумуляторе:
- sum_values: Σx
- sum_squared: Σx²
- product: Πx
- sum_product: Σx·y (с валидацией формы пары)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждый элемент расширяется до Decimal ДО сложения/умножения/возведения в квадрат
2. Никаких shortcut-формул: Σx² считается по элементам, а не через (Σx)²/n
3. Пустая последовательность: Σ = 0, Π = 1 (нейтральные элементы)
4. Входные последовательности не изменяются и не сохраняются
"""

import logging
from decimal import Decimal

from statlib.core.config import DEFAULT_CONFIG, StatisticsConfig
from statlib.core.domain.result import StatErrorKind, StatResult
from statlib.core.math.high_precision import (
    NumericSequence,
    find_non_finite,
    high_precision,
    widen,
    widen_all,
)

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLE-SEQUENCE ACCUMULATORS
# =============================================================================


def sum_values(values: NumericSequence, config: StatisticsConfig | None = None) -> Decimal:
    """
    Сумма всех элементов.

    Args:
        values: Числовая последовательность
        config: Конфигурация точности (default: DEFAULT_CONFIG)

    Returns:
        Σx, для пустой последовательности Decimal(0)

    Examples:
        >>> sum_values([1, 2, 3])
        Decimal('6')
        >>> sum_values([])
        Decimal('0')
    """
    total = Decimal(0)
    with high_precision(config):
        for value in widen_all(values):
            total += value
    return total


def sum_squared(values: NumericSequence, config: StatisticsConfig | None = None) -> Decimal:
    """
    Сумма квадратов элементов.

    Элемент расширяется до возведения в квадрат, чтобы не потерять точность
    (и не переполнить) исходный тип.

    Returns:
        Σx², для пустой последовательности Decimal(0)
    """
    total = Decimal(0)
    with high_precision(config):
        for value in widen_all(values):
            total += value * value
    return total


def product(values: NumericSequence, config: StatisticsConfig | None = None) -> Decimal:
    """
    Произведение всех элементов.

    Точно для небольших целых: product([1, 2, 3, 4, 5]) == 120.

    Returns:
        Πx, для пустой последовательности Decimal(1)
    """
    result = Decimal(1)
    with high_precision(config):
        for value in widen_all(values):
            result *= value
    return result


# =============================================================================
# PAIR REDUCER
# =============================================================================


def sum_product(
    xs: NumericSequence,
    ys: NumericSequence,
    config: StatisticsConfig | None = None,
) -> StatResult:
    """
    Сумма попарных произведений Σ(x_i · y_i).

    Порядок проверок:
    1. LENGTH_MISMATCH — длины различаются
    2. EMPTY_INPUT — последовательности пусты
    3. NON_FINITE_INPUT — элемент NaN/Inf
    4. NEGATIVE_RESULT — Σxy < 0 (если включено reject_negative_sum_product)

    NEGATIVE_RESULT — доменная политика для рядов доходностей, а не свойство
    скалярного произведения: для рядов разного знака Σxy < 0 корректно.

    Args:
        xs: Первая последовательность
        ys: Вторая последовательность
        config: Конфигурация (default: DEFAULT_CONFIG)

    Returns:
        StatResult с Σxy или ошибкой

    Examples:
        >>> sum_product([1, 2, 3], [4, 5, 6]).value
        Decimal('32')
        >>> sum_product([1, 2], [1]).error.kind
        <StatErrorKind.LENGTH_MISMATCH: 'LENGTH_MISMATCH'>
    """
    cfg = config or DEFAULT_CONFIG
    len_x, len_y = len(xs), len(ys)

    if len_x != len_y:
        return _fail(
            StatErrorKind.LENGTH_MISMATCH,
            f"sum_product: sequence lengths differ (len_x={len_x}, len_y={len_y})",
            len_x=len_x,
            len_y=len_y,
        )

    if len_x == 0:
        return _fail(
            StatErrorKind.EMPTY_INPUT,
            f"sum_product: empty input (len_x={len_x}, len_y={len_y})",
            len_x=len_x,
            len_y=len_y,
        )

    non_finite = check_finite_pair(xs, ys, "sum_product")
    if non_finite is not None:
        return non_finite

    total = Decimal(0)
    with high_precision(cfg):
        for x, y in zip(xs, ys):
            total += widen(x) * widen(y)

    if cfg.reject_negative_sum_product and total < 0:
        return _fail(
            StatErrorKind.NEGATIVE_RESULT,
            f"sum_product: negative sum of products {total} (n={len_x})",
            n=len_x,
            sum_product=total,
        )

    return StatResult.success(total)


# =============================================================================
# HELPERS
# =============================================================================


def check_finite_pair(
    xs: NumericSequence, ys: NumericSequence, operation: str
) -> StatResult | None:
    """
    NON_FINITE_INPUT для первого NaN/Inf элемента пары, иначе None.
    """
    for name, values in (("x", xs), ("y", ys)):
        found = find_non_finite(values)
        if found is not None:
            index, value = found
            return _fail(
                StatErrorKind.NON_FINITE_INPUT,
                f"{operation}: non-finite value {value!r} in {name} at index {index}",
                index=index,
            )
    return None


def _fail(kind: StatErrorKind, message: str, **context) -> StatResult:
    logger.debug("%s: %s", kind.value, message)
    return StatResult.failure(kind, message, **context)
