"""Typed application errors raised by services and rendered by routers."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN_REQUEST = "FORBIDDEN_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"


_READ_ONLY = frozenset({"message", "error_code", "status_code", "details", "is_operational"})


class ApiError(Exception):
    """Expected, caller-facing failure.

    ``is_operational`` separates these from defects: an ``ApiError`` is safe
    to show to the caller, anything else should be logged as a bug. The
    public attributes cannot be reassigned once the error is built.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_code: ErrorCode | str,
        details: Any = None,
    ):
        super().__init__(message)
        self.__dict__.update(
            message=message,
            error_code=ErrorCode(error_code),
            status_code=int(status_code),
            details=details,
            is_operational=True,
        )

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _READ_ONLY:
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name in _READ_ONLY:
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        super().__delattr__(name)

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "errorCode": self.error_code.value,
            "statusCode": self.status_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"ApiError({self.error_code.value}, {self.status_code}, {self.message!r})"

    # -------------------------------------- factories --------------------------------------
    @classmethod
    def unauthorized(cls, message: str, details: Any = None) -> "ApiError":
        return cls(message, status_code=401, error_code=ErrorCode.UNAUTHORIZED, details=details)

    @classmethod
    def not_found(cls, message: str, details: Any = None) -> "ApiError":
        return cls(message, status_code=404, error_code=ErrorCode.NOT_FOUND, details=details)

    @classmethod
    def forbidden(cls, message: str, details: Any = None) -> "ApiError":
        return cls(message, status_code=403, error_code=ErrorCode.FORBIDDEN_REQUEST, details=details)

    @classmethod
    def validation(cls, message: str, details: Any = None) -> "ApiError":
        return cls(message, status_code=400, error_code=ErrorCode.VALIDATION_ERROR, details=details)

    @classmethod
    def conflict(cls, message: str, details: Any = None) -> "ApiError":
        return cls(message, status_code=409, error_code=ErrorCode.CONFLICT, details=details)
