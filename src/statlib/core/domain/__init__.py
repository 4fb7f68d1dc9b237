"""
Domain models and value objects.

Contains the result-or-error outcome type shared by all fallible operations.
"""

from statlib.core.domain.result import (
    StatError,
    StatErrorKind,
    StatResult,
    StatResultError,
)

__all__ = [
    "StatError",
    "StatErrorKind",
    "StatResult",
    "StatResultError",
]
