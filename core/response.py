# core/response.py

from __future__ import annotations

from enum import Enum

from core.exceptions import DuplicateError, NotFoundError, ValidationError


class ErrorCode(Enum):
    # === Not Found ===
    # person, group, assignment, or group membership is missing
    NOT_FOUND = "NOT_FOUND"

    # === Constraint Violations ===
    # person, group, assignment, or membership already exists
    DUPLICATE_RECORD = "DUPLICATE_RECORD"

    # === Validation Failures ===
    # command text is malformed or incomplete
    INVALID_INPUT = "INVALID_INPUT"

    # the value is out of bounds or incorrectly formatted
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # === Internal Faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"


class Response:
    """
    Standard Response object for Roster manipulator and lookup methods.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        status_code (int | None): Optional HTTP-style response code.
        data (dict): Optional payload, varies by operation.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}

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
        return self._data

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
        status_code: int | None = 400,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def from_exception(cls, exc: Exception) -> Response:
        """
        Converts an exception raised by the data model into a failed `Response`.

        Args:
            exc (Exception): The caught exception.

        Returns:
            Response: A failed response with the following mapping:
                - `NotFoundError` -> `ErrorCode.NOT_FOUND`, status 404
                - `DuplicateError` -> `ErrorCode.DUPLICATE_RECORD`, status 409
                - `ValidationError` or any other `ValueError` -> `ErrorCode.VALIDATION_FAILED`, status 400
                - anything else -> `ErrorCode.INTERNAL_ERROR`, status 500

        Notes:
            - `DuplicateError` is checked before `ValueError` since it is also a `ValueError`.
        """
        if isinstance(exc, NotFoundError):
            return cls.fail(detail=str(exc), error=ErrorCode.NOT_FOUND, status_code=404)

        if isinstance(exc, DuplicateError):
            return cls.fail(
                detail=str(exc), error=ErrorCode.DUPLICATE_RECORD, status_code=409
            )

        if isinstance(exc, (ValidationError, ValueError)):
            return cls.fail(detail=str(exc), error=ErrorCode.VALIDATION_FAILED)

        return cls.fail(
            detail=f"Unexpected error: {exc}",
            error=ErrorCode.INTERNAL_ERROR,
            status_code=500,
        )

    # === dunder methods ===

    def __str__(self) -> str:
        if self.success:
            return f"Success: {self.detail or ''}"
        else:
            error_str = (
                self.error.value if isinstance(self.error, Enum) else self.error or ""
            )
            return f"Error: {error_str} - {self.detail or ''}"
