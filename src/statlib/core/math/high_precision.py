"""
High Precision — Extended-Precision Accumulator Primitives

Модуль задаёт numeric-stability политику всего ядра:
- Decimal-контекст расширенной точности (по умолчанию 34 значащие цифры)
- Точное расширение (widening) элементов последовательности в Decimal
- Проверка конечности значений (NaN/Inf) для fallible операций

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Widening точен: int, binary float и двоичные дроби (numpy.longdouble,
   Fraction со знаменателем 2^k) переводятся в Decimal без округления,
   округляется только последующая арифметика
2. Контекст локален (decimal.localcontext) и не протекает к вызывающему коду
3. Сигналы не перехватываются: overflow/invalid дают Infinity/NaN, как в IEEE
4. Все операции детерминированы и воспроизводимы
"""

import math
import numbers
from decimal import ROUND_HALF_EVEN, Context, Decimal, localcontext
from fractions import Fraction
from typing import ContextManager, Iterable, Iterator, Protocol, Tuple, TypeVar, Union

from statlib.core.config import DEFAULT_CONFIG, StatisticsConfig

# Тип high-precision аккумулятора
HighPrecisionFloat = Decimal

# Допустимые типы элементов последовательности
Number = Union[int, float, Decimal, Fraction, numbers.Real]

T_co = TypeVar("T_co", covariant=True)


class NumericSequence(Protocol[T_co]):
    """
    Capability-протокол числовой последовательности.

    Достаточно длины и упорядоченного обхода: list, tuple, array.array,
    numpy.ndarray, range и т.п.
    """

    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[T_co]: ...


# =============================================================================
# КОНТЕКСТ ТОЧНОСТИ
# =============================================================================


def make_context(precision: int) -> Context:
    """
    Decimal-контекст заданной точности без trap-ов.

    Args:
        precision: Число значащих цифр

    Returns:
        Новый decimal.Context
    """
    return Context(prec=precision, rounding=ROUND_HALF_EVEN, traps=[])


def high_precision(config: StatisticsConfig | None = None) -> ContextManager[Context]:
    """
    Локальный контекст расширенной точности для одной операции.

    Examples:
        >>> with high_precision():
        ...     widen(0.1) + widen(0.2)
        Decimal('0.3000000000000000166533453693773481')
    """
    cfg = config or DEFAULT_CONFIG
    return localcontext(make_context(cfg.precision))


# =============================================================================
# WIDENING
# =============================================================================


def widen(value: Number) -> Decimal:
    """
    Точное расширение числа до high-precision значения.

    int и float конвертируются без потери точности (Decimal хранит
    точное двоичное значение float). Прочие вещественные типы
    (Fraction, numpy.longdouble) раскладываются через as_integer_ratio():
    двоичная дробь переводится точно, остальные делятся в текущем контексте.

    Args:
        value: Элемент последовательности

    Returns:
        Decimal-представление value

    Raises:
        TypeError: Если value не является вещественным числом

    Examples:
        >>> widen(5)
        Decimal('5')
        >>> widen(0.5)
        Decimal('0.5')
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, (int, float)):
        return Decimal(value)
    if isinstance(value, numbers.Integral):
        return Decimal(int(value))
    if not isinstance(value, numbers.Real):
        raise TypeError(f"Expected a real number, got {type(value).__name__}: {value!r}")
    if hasattr(value, "as_integer_ratio") and is_finite_value(value):
        return ratio_to_decimal(*value.as_integer_ratio())
    return Decimal(float(value))


def ratio_to_decimal(numerator: int, denominator: int) -> Decimal:
    """
    numerator / denominator как Decimal.

    Для знаменателя 2^k результат точный: n / 2^k = n·5^k / 10^k.
    Иначе деление округляется в текущем контексте.

    Examples:
        >>> ratio_to_decimal(3, 8)
        Decimal('0.375')
    """
    if denominator > 0 and denominator & (denominator - 1) == 0:
        k = denominator.bit_length() - 1
        return Decimal(f"{numerator * 5**k}E-{k}")
    return Decimal(numerator) / Decimal(denominator)


def widen_all(values: Iterable[Number]) -> Iterator[Decimal]:
    """Ленивое расширение всех элементов последовательности."""
    return (widen(v) for v in values)


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_finite_value(value: Number) -> bool:
    """
    Проверка, что значение конечно (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite
    """
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, (int, Fraction, numbers.Integral)):
        return True
    return math.isfinite(value)


def find_non_finite(values: Iterable[Number]) -> Tuple[int, Number] | None:
    """
    Поиск первого NaN/Inf элемента.

    Args:
        values: Последовательность значений

    Returns:
        (index, value) первого невалидного элемента или None
    """
    for index, value in enumerate(values):
        if not is_finite_value(value):
            return index, value
    return None
