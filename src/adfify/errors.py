"""Error hierarchy for adfify.

Every public error class inherits from :class:`AdfifyError`.  Each carries
a machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Conversion itself never raises for Markdown input: unsupported content is
dropped.  These errors signal *contract* violations, e.g. a node builder
called with an argument outside its domain, or a lexer that returned
something other than a token list.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes for every error adfify can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_URL = "INVALID_URL"
    LEXER_ERROR = "LEXER_ERROR"


class AdfifyError(Exception):
    """Base exception for all adfify errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class AdfifyValidationError(AdfifyError):
    """A builder received input outside its documented domain.

    Context keys: ``field``, ``value``, ``constraint``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        *,
        code: str = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        super().__init__(code=code, message=message, context=context, cause=cause)


class AdfifyInvalidUrlError(AdfifyValidationError):
    """A media node was requested for a value that is not an absolute URI.

    Context keys: ``url``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            cause=cause,
            code=ErrorCode.INVALID_URL,
        )


class AdfifyLexerError(AdfifyError):
    """The Markdown lexer produced output that is not a token sequence.

    Context keys: ``result_type``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.LEXER_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
