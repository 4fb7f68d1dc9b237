"""
Core math modules для statlib

Свёртки последовательностей и парные статистики на high-precision аккумуляторе.
"""

# High Precision
from statlib.core.math.high_precision import (
    HighPrecisionFloat,
    Number,
    NumericSequence,
    find_non_finite,
    high_precision,
    is_finite_value,
    make_context,
    widen,
    widen_all,
)

# Accumulators & Pair Reducer
from statlib.core.math.accumulators import (
    product,
    sum_product,
    sum_squared,
    sum_values,
)

# Derived Statistics
from statlib.core.math.derived import (
    average,
    geometric_mean,
)

# Bivariate Statistics
from statlib.core.math.bivariate import (
    MIN_SAMPLE_SIZE,
    correlation_coefficient,
    covariance,
    raw_deviation_denominator_part,
)

__all__ = [
    # High Precision — Types
    "HighPrecisionFloat",
    "Number",
    "NumericSequence",
    # High Precision — Functions
    "find_non_finite",
    "high_precision",
    "is_finite_value",
    "make_context",
    "widen",
    "widen_all",
    # Accumulators
    "product",
    "sum_squared",
    "sum_values",
    # Pair Reducer
    "sum_product",
    # Derived Statistics
    "average",
    "geometric_mean",
    # Bivariate Statistics — Constants
    "MIN_SAMPLE_SIZE",
    # Bivariate Statistics — Functions
    "correlation_coefficient",
    "covariance",
    "raw_deviation_denominator_part",
]
