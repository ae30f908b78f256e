# core/response.py

from __future__ import annotations

import traceback
from enum import Enum


class ErrorCode(Enum):
    # === Authorization ===
    # caller lacks the required role or identity
    UNAUTHORIZED = "UNAUTHORIZED"

    # === Not Found ===
    # referenced teacher, student, class, or subject does not exist
    NOT_FOUND = "NOT_FOUND"

    # === Constraint Violations ===
    DUPLICATE_ID = "DUPLICATE_ID"
    DUPLICATE_CLASS = "DUPLICATE_CLASS"
    DUPLICATE_SUBJECT = "DUPLICATE_SUBJECT"

    # identity already holds the other of the teacher/student roles
    ROLE_CONFLICT = "ROLE_CONFLICT"

    # a subject's teacher list names an identity that is not a teacher
    UNREGISTERED_TEACHER = "UNREGISTERED_TEACHER"

    # === State Restrictions ===
    INACTIVE_TEACHER = "INACTIVE_TEACHER"
    NOT_TEACHING_SUBJECT = "NOT_TEACHING_SUBJECT"

    # new value equals current value
    NO_OP = "NO_OP"

    # === Validation Failures ===
    INVALID_NAME = "INVALID_NAME"
    INVALID_TARGET = "INVALID_TARGET"
    OUT_OF_RANGE = "OUT_OF_RANGE"

    # required argument or attribute is missing
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # input structure is malformed or incomplete
    INVALID_INPUT = "INVALID_INPUT"

    # field value has the wrong type or is incorrectly formatted
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"

    # === Internal Faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES.get(self, 400)


_STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHORIZED: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.DUPLICATE_ID: 409,
    ErrorCode.DUPLICATE_CLASS: 409,
    ErrorCode.DUPLICATE_SUBJECT: 409,
    ErrorCode.ROLE_CONFLICT: 409,
    ErrorCode.NO_OP: 409,
    ErrorCode.INACTIVE_TEACHER: 422,
    ErrorCode.NOT_TEACHING_SUBJECT: 403,
    ErrorCode.INTERNAL_ERROR: 500,
}


class RegistryError(Exception):
    """
    Raised by `Registry` validators when a precondition is not met.

    Operations catch it before any mutation and convert it into a failed `Response`.

    Attributes:
        error (ErrorCode): The machine-readable rejection reason.
        detail (str): A human-readable explanation.
    """

    def __init__(self, error: ErrorCode, detail: str):
        super().__init__(detail)
        self.error = error
        self.detail = detail

    def to_response(self) -> Response:
        return Response.fail(
            detail=self.detail,
            error=self.error,
            status_code=self.error.status_code,
        )


class Response:
    """
    Standard Response object for Registry operations and lookup methods.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        status_code (int | None): Optional HTTP-style response code.
        data (dict): Optional payload, varies by operation.
        trace (str | None): Optional exception traceback when errors occur.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
        trace: str | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}
        self._trace = trace

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def error(self) -> ErrorCode | str | None:
        return self._error

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data or {}

    @property
    def trace(self) -> str | None:
        return self._trace

    # === public classmethods ===

    @classmethod
    def succeed(
        cls,
        detail: str | None = None,
        status_code: int | None = 200,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=True,
            detail=detail,
            error=None,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
        trace: str | None = None,
    ) -> Response:
        if status_code is None:
            status_code = error.status_code if isinstance(error, ErrorCode) else 400

        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=status_code,
            data=data,
            trace=trace,
        )

    @classmethod
    def from_exception(cls, exc: Exception) -> Response:
        """
        Wraps an unexpected exception as an `ErrorCode.INTERNAL_ERROR` failure, keeping its traceback.
        """
        return cls.fail(
            detail=f"Unexpected error: {exc}",
            error=ErrorCode.INTERNAL_ERROR,
            trace="".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            ),
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "error": self.error.value if isinstance(self.error, Enum) else self.error,
            "detail": self.detail,
            "data": self.data,
            "status_code": self.status_code,
            "trace": self.trace,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> Response:
        error = payload.get("error")

        if error in ErrorCode._value2member_map_:
            error = ErrorCode(error)

        return cls(
            success=payload["success"],
            error=error,
            detail=payload.get("detail"),
            data=payload.get("data", {}),
            status_code=payload.get("status_code"),
            trace=payload.get("trace"),
        )

    # === dunder methods ===

    def __str__(self) -> str:
        if self.success:
            return f"Success: {self.detail or ''}"
        else:
            error_str = (
                self.error.value if isinstance(self.error, Enum) else self.error or ""
            )
            return f"Error: {error_str}"
