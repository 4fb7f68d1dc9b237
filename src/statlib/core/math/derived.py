"""
Derived Statistics — average и geometric mean

Простые преобразования аккумуляторов. Пустая последовательность даёт 0
(деление на ноль не выполняется).
"""

from decimal import Decimal

from statlib.core.config import StatisticsConfig
from statlib.core.math.accumulators import product, sum_values
from statlib.core.math.high_precision import NumericSequence, high_precision


def average(values: NumericSequence, config: StatisticsConfig | None = None) -> Decimal:
    """
    Среднее арифметическое: Σx / n.

    Returns:
        Среднее, для пустой последовательности Decimal(0)

    Examples:
        >>> average([1, 2, 3, 4])
        Decimal('2.5')
    """
    n = len(values)
    if n == 0:
        return Decimal(0)

    total = sum_values(values, config)
    with high_precision(config):
        return total / n


def geometric_mean(values: NumericSequence, config: StatisticsConfig | None = None) -> Decimal:
    """
    Среднее геометрическое: (Πx)^(1/n).

    Знак элементов не проверяется: отрицательное произведение с нецелым
    корнем даёт Decimal('NaN').

    Returns:
        Среднее геометрическое, для пустой последовательности Decimal(0)
    """
    n = len(values)
    if n == 0:
        return Decimal(0)

    total = product(values, config)
    with high_precision(config):
        return total ** (Decimal(1) / n)
