"""
Tagged service results.

Service operations never raise for expected failures.  They return a
``Result`` holding either a value or a ``ServiceError`` whose ``kind`` the
transport layer maps onto an HTTP status (see ``api/responses.py``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    SERVER = "server"


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str
    detail: Optional[str] = None  # only surfaced outside production


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        detail: Optional[str] = None,
    ) -> "Result[T]":
        return cls(error=ServiceError(kind=kind, message=message, detail=detail))
