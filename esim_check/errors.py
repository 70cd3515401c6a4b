"""Error kinds shared by the lookup flow and the HTTP layer.

Every failure the service can report is one of the ErrorKind members; the
member carries its HTTP status and the ``code`` value exposed to clients.
"""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    LOCAL_THROTTLE = "LOCAL_THROTTLE"
    UPSTREAM_BLOCKED = "UPSTREAM_BLOCKED"
    UPSTREAM_RATE_LIMITED = "UPSTREAM_RATE_LIMITED"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    INTERNAL = "INTERNAL"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]

    @property
    def response_code(self) -> str | int | None:
        """Value of the ``code`` field in the error body, if any."""
        return _RESPONSE_CODE.get(self)


_HTTP_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.LOCAL_THROTTLE: 429,
    ErrorKind.UPSTREAM_BLOCKED: 429,
    ErrorKind.UPSTREAM_RATE_LIMITED: 429,
    ErrorKind.UPSTREAM_FAILURE: 500,
    ErrorKind.INTERNAL: 500,
}

_RESPONSE_CODE: dict[ErrorKind, str | int] = {
    ErrorKind.LOCAL_THROTTLE: "LOCAL_THROTTLE",
    ErrorKind.UPSTREAM_BLOCKED: "UPSTREAM_BLOCKED",
    ErrorKind.UPSTREAM_RATE_LIMITED: 429,
}


class EsimCheckError(Exception):
    """Base class for failures surfaced to API clients."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str = ""):
        super().__init__(message or self.kind.value)


class InvalidRequestError(EsimCheckError):
    kind = ErrorKind.VALIDATION


class LocalThrottleError(EsimCheckError):
    kind = ErrorKind.LOCAL_THROTTLE


class UpstreamBlockedError(EsimCheckError):
    kind = ErrorKind.UPSTREAM_BLOCKED


class UpstreamRateLimitedError(EsimCheckError):
    kind = ErrorKind.UPSTREAM_RATE_LIMITED


class UpstreamFailureError(EsimCheckError):
    kind = ErrorKind.UPSTREAM_FAILURE
