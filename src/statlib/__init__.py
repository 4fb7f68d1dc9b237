"""
statlib — High-precision descriptive & bivariate statistics

Sum, average, product, geometric mean, sum of squares, sum of products,
sample covariance and Pearson correlation over in-memory numeric sequences.
Fallible operations return StatResult (value or structured error).
"""

import logging

from statlib.core.config import DEFAULT_CONFIG, HIGH_PRECISION_DIGITS, StatisticsConfig
from statlib.core.domain import StatError, StatErrorKind, StatResult, StatResultError
from statlib.core.math import (
    HighPrecisionFloat,
    NumericSequence,
    average,
    correlation_coefficient,
    covariance,
    geometric_mean,
    product,
    raw_deviation_denominator_part,
    sum_product,
    sum_squared,
    sum_values,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Config
    "DEFAULT_CONFIG",
    "HIGH_PRECISION_DIGITS",
    "StatisticsConfig",
    # Domain
    "StatError",
    "StatErrorKind",
    "StatResult",
    "StatResultError",
    # Types
    "HighPrecisionFloat",
    "NumericSequence",
    # Operations
    "average",
    "correlation_coefficient",
    "covariance",
    "geometric_mean",
    "product",
    "raw_deviation_denominator_part",
    "sum_product",
    "sum_squared",
    "sum_values",
]
