"""Discriminated results returned by fallible gameshow operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    NOT_CAPTAIN = "not_captain"
    NO_ACTIVE_ROUND = "no_active_round"
    INVALID_INDEX = "invalid_index"
    INVALID_ANSWER = "invalid_answer"


@dataclass(slots=True, frozen=True)
class OperationResult(Generic[T]):
    """Either a success payload or a tagged failure with a readable reason."""

    ok: bool
    value: T | None = None
    error: ErrorKind | None = None
    reason: str | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "OperationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ErrorKind, reason: str) -> "OperationResult[T]":
        return cls(ok=False, error=error, reason=reason)

    def __bool__(self) -> bool:
        return self.ok
