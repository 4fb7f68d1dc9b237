"""
StatResult — Модель результата вычисления (value или error)

Immutable Pydantic модели, представляющие исход любой fallible операции:
- StatErrorKind: таксономия ошибок
- StatError: структурированная ошибка с числовым контекстом
- StatResult: ровно одно из value (Decimal) или error (StatError)

Ошибки данных возвращаются как значения, а не исключения. Вызывающий код
ветвится по StatResult.is_ok и сам решает, как показывать сообщение.
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Dict, Optional, Union

from pydantic import BaseModel, Field, model_validator

# Числа контекста могут быть NaN/Inf (переполнение, невалидные суммы)
ContextDecimal = Annotated[Decimal, Field(allow_inf_nan=True)]


# =============================================================================
# ENUMS
# =============================================================================


class StatErrorKind(str, Enum):
    """Таксономия ошибок вычислений."""

    LENGTH_MISMATCH = "LENGTH_MISMATCH"
    EMPTY_INPUT = "EMPTY_INPUT"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    NEGATIVE_RESULT = "NEGATIVE_RESULT"
    NEGATIVE_RADICAND = "NEGATIVE_RADICAND"
    ZERO_DENOMINATOR = "ZERO_DENOMINATOR"
    NON_FINITE_INPUT = "NON_FINITE_INPUT"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class StatResultError(Exception):
    """
    Попытка извлечь значение из неуспешного StatResult.

    Используется только в StatResult.unwrap(), для вызывающего кода,
    который предпочитает исключения на своей границе.
    """

    def __init__(self, error: "StatError"):
        super().__init__(f"{error.kind.value}: {error.message}")
        self.error = error


# =============================================================================
# ERROR MODEL
# =============================================================================


class StatError(BaseModel):
    """
    Структурированная ошибка вычисления.

    message — человекочитаемое описание с числами, достаточными для
    диагностики без повторного запуска. context — те же числа в
    машиночитаемом виде (длины, суммы, radicand).
    """

    kind: StatErrorKind = Field(..., description="Категория ошибки")
    message: str = Field(..., min_length=1, description="Описание с числовым контекстом")
    context: Dict[str, Union[int, ContextDecimal]] = Field(
        default_factory=dict, description="Числовой контекст ошибки"
    )

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# RESULT MODEL
# =============================================================================


class StatResult(BaseModel):
    """
    Результат fallible операции: value или error, но не оба.

    Examples:
        >>> StatResult.success(Decimal("0.5")).value
        Decimal('0.5')
        >>> StatResult.failure(StatErrorKind.EMPTY_INPUT, "empty").is_ok
        False
    """

    value: Optional[Decimal] = Field(
        None, allow_inf_nan=True, description="Значение (high-precision)"
    )
    error: Optional[StatError] = Field(None, description="Ошибка вычисления")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_exactly_one(self) -> "StatResult":
        """Ровно одно из value/error должно быть задано."""
        if (self.value is None) == (self.error is None):
            raise ValueError("StatResult requires exactly one of value or error")
        return self

    @classmethod
    def success(cls, value: Decimal) -> "StatResult":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: StatErrorKind,
        message: str,
        **context: Union[int, Decimal],
    ) -> "StatResult":
        return cls(error=StatError(kind=kind, message=message, context=context))

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Decimal:
        """
        Значение или исключение.

        Returns:
            value

        Raises:
            StatResultError: Если результат содержит ошибку
        """
        if self.error is not None:
            raise StatResultError(self.error)
        return self.value
