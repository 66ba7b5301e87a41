# Filename: fileshare/errors.py
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Outcome(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    PARENT_NOT_FOUND = "parent_not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    IO_ERROR = "io_error"


@dataclass
class Result(Generic[T]):
    """Outcome of a repository operation plus its payload (if any).

    Expected failures (missing ids, wrong passwords, a failed save) travel
    back as a non-OK outcome instead of an exception.
    """

    outcome: Outcome
    value: Optional[T] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(Outcome.OK, value)

    @classmethod
    def failure(cls, outcome: Outcome, detail: Optional[str] = None) -> "Result[T]":
        return cls(outcome, None, detail)


class PersistenceError(Exception):
    """Raised by a persistence gateway when loading or saving fails."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Persistence operation '{operation}' failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
