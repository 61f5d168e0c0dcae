# =============================================================================
# core/errors.py  -  Error taxonomy for Apollo API calls
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Defines every failure a tool call can end with, and the pure function
#   that turns a failed HTTP exchange into one of them.
#
# THE TAXONOMY:
#   ErrorKind.AUTHENTICATION        401 from Apollo
#   ErrorKind.RATE_LIMIT            429 from Apollo (may carry retry_after)
#   ErrorKind.VALIDATION            400 from Apollo (may carry details)
#   ErrorKind.UPSTREAM              any other HTTP error status
#   ErrorKind.TRANSPORT             no response at all (connect/timeout)
#   ErrorKind.UNKNOWN               anything else that went wrong in the client
#   ErrorKind.PARAMETER_VALIDATION  caller arguments rejected before any call
#
# The first six are ApolloError subclasses and are only ever raised by
# core/client.py.  ParameterValidationError is raised by core/params.py and
# never reaches the network.
# =============================================================================

from enum import Enum
from typing import Any, Mapping, Optional


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    UPSTREAM = "upstream"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"
    PARAMETER_VALIDATION = "parameter_validation"


class ApolloError(Exception):
    """A failed call to the Apollo API.

    Used directly for generic upstream failures (any HTTP error status that
    has no more specific subclass).
    """

    kind = ErrorKind.UPSTREAM

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Caller-facing error value: {kind, message, httpStatus?, details?}."""
        result: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.code is not None:
            result["code"] = self.code
        if self.status_code is not None:
            result["httpStatus"] = self.status_code
        if self.details is not None:
            result["details"] = self.details
        return result


class AuthenticationError(ApolloError):
    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, "AUTHENTICATION_FAILED", 401)


class RateLimitError(ApolloError):
    kind = ErrorKind.RATE_LIMIT

    def __init__(self, message: str = "Rate limit exceeded", retry_after: Optional[int] = None):
        super().__init__(message, "RATE_LIMIT_EXCEEDED", 429)
        self.retry_after = retry_after

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.retry_after is not None:
            result["retryAfterSeconds"] = self.retry_after
        return result


class RequestValidationError(ApolloError):
    """Apollo rejected the request body or query (HTTP 400)."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, "VALIDATION_ERROR", 400, details)


class TransportError(ApolloError):
    """No response was received: connection refused, DNS failure, timeout."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str = "Network error: Unable to reach Apollo API"):
        super().__init__(message, "NETWORK_ERROR")


class UnknownApolloError(ApolloError):
    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message, "UNKNOWN_ERROR")


class ParameterValidationError(ValueError):
    """Caller arguments failed a capability's declared schema."""

    kind = ErrorKind.PARAMETER_VALIDATION

    def __init__(self, problems: list[str]):
        self.problems = problems
        self.message = "Validation error: " + ", ".join(problems)
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message, "details": self.problems}


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        # HTTP-date form; no advisory wait
        return None


def classify_http_error(
    status: int,
    body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
    reason: str = "",
) -> ApolloError:
    """Map an HTTP error response onto the error taxonomy.

    Pure function: no I/O and no logging, so it can be tested with synthetic
    values.

    Args:
        status: HTTP status code of the received response.
        body: Parsed JSON body, if any.  Apollo reports errors as
              {"error": {"message", "code", "details"}} and sometimes as
              {"error": "<message>"}.
        headers: Response headers (case-insensitive lookup is the caller's
                 responsibility; httpx.Headers already provides it).
        reason: HTTP reason phrase, used when the body carries no message.

    Returns:
        The ApolloError subclass instance for this status.
    """
    error_body: dict[str, Any] = {}
    if isinstance(body, Mapping):
        raw_error = body.get("error")
        if isinstance(raw_error, Mapping):
            error_body = dict(raw_error)
        elif isinstance(raw_error, str) and raw_error:
            error_body = {"message": raw_error}
        elif isinstance(body.get("message"), str):
            error_body = {"message": body["message"]}

    message = error_body.get("message") or f"HTTP {status} {reason}".strip()
    details = error_body.get("details")

    if status == 401:
        return AuthenticationError(message)
    if status == 429:
        retry_after = _parse_retry_after((headers or {}).get("retry-after"))
        return RateLimitError(message, retry_after)
    if status == 400:
        return RequestValidationError(message, details)
    return ApolloError(message, error_body.get("code"), status, details)
