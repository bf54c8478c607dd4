"""Result object returned by the mode dispatcher.

Shells (the CLI and the web app) get an explicit success or failure value
back instead of having to catch the core's exceptions themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    """Outcome of running one calculator mode.

    Attributes
    ----------
    success: bool
        Whether the mode ran to completion.
    value: Optional[T]
        The mode's output on success.
    error: Optional[str]
        Human readable error message on failure.
    error_type: Optional[str]
        Machine readable error code on failure (e.g. ``"INVALID_MONTH"``).
    """

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, error_type: Optional[str] = None) -> "Result[T]":
        return cls(success=False, error=error, error_type=error_type)

    def __bool__(self) -> bool:
        return self.success
