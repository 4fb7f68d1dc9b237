"""
StatisticsConfig — Конфигурация вычислительного ядра

Параметры точности и политики проверок для всех операций statlib:
- precision: число значащих цифр high-precision аккумулятора (Decimal)
- reject_negative_sum_product: sanity-check Σxy ≥ 0 (return-correlation use case)

Конфигурация immutable. Все операции принимают опциональный config,
по умолчанию используется DEFAULT_CONFIG.
"""

from dataclasses import dataclass
from typing import Final


# =============================================================================
# DEFAULTS
# =============================================================================

# Значащие цифры high-precision аккумулятора (IEEE 754 decimal128)
# binary64 даёт ~16 цифр, поэтому 34 заведомо шире double
HIGH_PRECISION_DIGITS: Final[int] = 34

# Политика sanity-check для Σxy (см. sum_product)
REJECT_NEGATIVE_SUM_PRODUCT_DEFAULT: Final[bool] = True


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class StatisticsConfig:
    """Конфигурация вычислений.

    NEGATIVE_RESULT для Σxy — доменная политика финансовых рядов доходностей,
    а не свойство скалярного произведения: для рядов разного знака Σxy < 0
    математически корректно. Для general-purpose использования политику
    можно отключить через reject_negative_sum_product=False.
    """

    precision: int = HIGH_PRECISION_DIGITS
    reject_negative_sum_product: bool = REJECT_NEGATIVE_SUM_PRODUCT_DEFAULT

    def __post_init__(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise ValueError(f"precision must be an int, got {self.precision!r}")
        if self.precision < 1:
            raise ValueError(f"precision must be >= 1, got {self.precision}")


DEFAULT_CONFIG: Final[StatisticsConfig] = StatisticsConfig()
