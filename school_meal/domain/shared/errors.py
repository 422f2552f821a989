"""
Domain exceptions.

Typed exceptions for explicit error handling.
The orchestration service is the only layer that recovers from them.
"""

from __future__ import annotations

from typing import Optional


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain-specific exceptions inherit from this.
    Allows catching all domain errors with single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# MEAL SERVICE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class MealServiceError(DomainError):
    """Base exception for the meal lookup pipeline."""

    pass


class InvalidDateError(MealServiceError, ValueError):
    """
    Date missing or not in YYYY-MM-DD shape.

    Raised when:
    - No date was selected
    - Date string is malformed
    - Date does not exist on the calendar (e.g. 2024-02-30)

    Example:
        >>> raise InvalidDateError("Expected YYYY-MM-DD, got '2024/01/05'")
    """

    pass


class NetworkError(MealServiceError):
    """
    Both relay transports failed.

    The terminal transport failure is chained as ``__cause__``.

    Example:
        >>> raise NetworkError("Fallback relay failed: status 502")
    """

    pass


class MalformedResponseError(MealServiceError):
    """
    Response body is not parseable as XML.

    Example:
        >>> raise MalformedResponseError("mismatched tag: line 1, column 30")
    """

    pass


class ApiError(MealServiceError):
    """
    Upstream API reported a non-success result code.

    Attributes:
        code: Result code (e.g. "INFO-200")
        message: Human-readable message from the API

    Example:
        >>> raise ApiError("INFO-200", "해당하는 데이터가 없습니다.")
    """

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"NEIS API error {code}: {message}")


class NoDataError(MealServiceError):
    """
    Document is well-formed but holds no meal container at all.

    Example:
        >>> raise NoDataError("No meal data for this date")
    """

    pass


# ═══════════════════════════════════════════════════════════
# EXTERNAL SERVICE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ExternalServiceError(DomainError):
    """
    A single external call failed.

    Raised by a relay transport when the relay answers with a
    non-success status. The fetch client decides whether to fall back.

    Attributes:
        status: HTTP status code, if a response was received

    Example:
        >>> raise ExternalServiceError("corsproxy returned 503", status=503)
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        self.status = status
        super().__init__(message)
