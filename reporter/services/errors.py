"""Error taxonomy shared by the service, the client and the submission controller."""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of a failed analysis."""

    VALIDATION = "validation_error"
    RATE_LIMITED = "rate_limited"
    PAYMENT_REQUIRED = "payment_required"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    TIMEOUT = "timeout"
    NETWORK = "network_error"
    UNEXPECTED = "unexpected"


class ValidationKind(str, Enum):
    """Which input constraint a report violated."""

    MISSING_FIELD = "missing_field"
    INVALID_CATEGORY = "invalid_category"
    LENGTH_OUT_OF_RANGE = "length_out_of_range"
    INVALID_EMAIL = "invalid_email"


HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.PAYMENT_REQUIRED: 402,
    ErrorKind.UPSTREAM_UNAVAILABLE: 503,
    ErrorKind.NETWORK: 503,
    ErrorKind.TIMEOUT: 504,
    ErrorKind.UNEXPECTED: 500,
}

# What the end user sees once the client gives up
USER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.RATE_LIMITED: "The service is busy right now. Please try again shortly.",
    ErrorKind.PAYMENT_REQUIRED: "The AI service is currently unavailable. Please contact support.",
    ErrorKind.UPSTREAM_UNAVAILABLE: "The AI service is temporarily unavailable. Please try again later.",
    ErrorKind.TIMEOUT: "The request timed out. Please check your connection and try again.",
    ErrorKind.NETWORK: "Could not reach the service. Please check your connection and try again.",
    ErrorKind.UNEXPECTED: "Failed to analyze report. Please try again.",
}


class ReportError(Exception):
    """Base class for every classified analysis failure."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_message = "Unknown error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]


class ReportValidationError(ReportError):
    """Input failed validation. Never retried."""

    kind = ErrorKind.VALIDATION
    default_message = "Invalid incident report"

    def __init__(
        self, validation_kind: ValidationKind | None = None, message: str | None = None
    ):
        self.validation_kind = validation_kind
        super().__init__(message)


class RateLimitedError(ReportError):
    kind = ErrorKind.RATE_LIMITED
    default_message = "Rate limit exceeded. Please try again in a moment."


class PaymentRequiredError(ReportError):
    kind = ErrorKind.PAYMENT_REQUIRED
    default_message = "AI service requires payment. Please contact support."


class UpstreamUnavailableError(ReportError):
    """The gateway answered with an unusable response."""

    kind = ErrorKind.UPSTREAM_UNAVAILABLE
    default_message = "AI service is unavailable"

    def __init__(self, message: str | None = None, upstream_status: int | None = None):
        self.upstream_status = upstream_status
        super().__init__(message)


class MalformedUpstreamResponseError(UpstreamUnavailableError):
    default_message = "AI service returned an unexpected response"


class GatewayTimeoutError(ReportError):
    kind = ErrorKind.TIMEOUT
    default_message = "AI service did not respond in time"


class NetworkError(ReportError):
    kind = ErrorKind.NETWORK
    default_message = "Could not connect to the AI service"


class UnexpectedError(ReportError):
    kind = ErrorKind.UNEXPECTED


def user_message(error: ReportError) -> str:
    """Message to show the end user for a failure.

    Validation messages are already phrased for the user and pass through.
    """
    if error.kind is ErrorKind.VALIDATION:
        return error.message
    return USER_MESSAGES[error.kind]


def is_transient(error: ReportError) -> bool:
    """Whether retrying the same request could plausibly succeed."""
    if error.kind in (ErrorKind.RATE_LIMITED, ErrorKind.TIMEOUT, ErrorKind.NETWORK):
        return True
    if isinstance(error, UpstreamUnavailableError):
        return error.upstream_status is None or error.upstream_status >= 500
    return False
