"""
AttnViz Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the failure modes of a request.
Why:   Services raise domain errors; global handlers registered in main.py
       turn them into HTTP status codes. Routes stay free of try/except.
How:   Each exception carries a human-readable message and an optional
       context dict (logged server-side).
Who:   Raised by TextStore and payload decoding; caught by global handlers.

Exception Hierarchy:
    AttnVizError (base)
    ├── ValidationError   → 400 Bad Request (text too long)
    ├── DecodeError       → 400 Bad Request (malformed payload, strict mode only)
    ├── NotFoundError     → 404 Not Found
    └── StoreError        → 500 Internal Server Error

Every error is terminal for its request: nothing is retried, and each
operation touches at most one record, so there is no partial failure to compose.
"""

from typing import Any, Dict, Optional


class AttnVizError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned as the response body)
        context:  Additional debug info (logged, not returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AttnVizError):
    """
    Raised when client input breaks a business rule.

    When:    Text longer than the configured maximum (100 characters).
    HTTP:    400 Bad Request

    Raised before anything touches the database, so a rejected text is
    never persisted and never truncated.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DecodeError(AttnVizError):
    """
    Raised when a request body cannot be decoded into a text payload.

    Only surfaced when STRICT_PAYLOAD_DECODING is enabled; the permissive
    default decodes such bodies to an empty text instead.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Malformed request payload",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(AttnVizError):
    """
    Raised when a requested record does not exist.

    When:    GET or PUT /api/texts/{id} with an id that has no row.
    HTTP:    404 Not Found

    SQLAlchemy returns None (or a zero rowcount) for missing rows; the store
    converts that into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(AttnVizError):
    """
    Raised when the underlying persistence layer fails.

    When:    Lost connection, I/O error, constraint violation, etc.
    HTTP:    500 Internal Server Error

    Note:
        The message includes the underlying driver error text and it is
        returned to the client as-is. Acceptable for an internal tool;
        revisit before exposing the service publicly.
    """

    def __init__(
        self,
        message: str = "A storage error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
