from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Status(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    ERROR = "error"


@dataclass(frozen=True)
class Result(Generic[T]):
    status: Status
    value: Optional[T] = None
    message: Optional[str] = None
    errors: tuple = ()

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(Status.OK, value=value)

    @classmethod
    def not_found(cls, message: str = "Not found") -> "Result[T]":
        return cls(Status.NOT_FOUND, message=message)

    @classmethod
    def invalid(cls, message: str, errors=()) -> "Result[T]":
        return cls(Status.INVALID, message=message, errors=tuple(errors))

    @classmethod
    def error(cls, message: str = "Database error") -> "Result[T]":
        return cls(Status.ERROR, message=message)
