"""Report submission controller: bounded retries with linear backoff.

The controller drives a single submission through
``idle -> attempting(n) -> succeeded | failed``. Each attempt is an injected
coroutine (a remote API call on the client, or a direct gateway call from
the CLI), so the retry behaviour is the same whichever transport is used.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from reporter.config import get_settings
from reporter.models.report import GuidanceResult, IncidentReport
from reporter.services.errors import (
    ErrorKind,
    ReportError,
    ReportValidationError,
    UnexpectedError,
    is_transient,
    user_message,
)
from reporter.services.validation import validate_report

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_SECONDS = 1.0

AttemptFn = Callable[[IncidentReport], Awaitable[str]]


class SubmissionState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RetryPolicy(str, Enum):
    """Which failures earn another attempt.

    ALWAYS retries every failure except validation errors. TRANSIENT only
    retries rate limits, timeouts, network errors and 5xx upstream errors.
    """

    ALWAYS = "always"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class Success:
    result: GuidanceResult
    attempts: int


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str
    attempts: int


SubmissionOutcome = Success | Failure


class SubmissionController:
    """Run one report through up to ``max_attempts`` delivery attempts."""

    def __init__(
        self,
        attempt: AttemptFn,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
        retry_policy: RetryPolicy = RetryPolicy.ALWAYS,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._attempt = attempt
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self.retry_policy = RetryPolicy(retry_policy)
        self.state = SubmissionState.IDLE
        self.attempt_number = 0

    def _should_retry(self, error: ReportError) -> bool:
        if error.kind is ErrorKind.VALIDATION:
            return False
        if self.retry_policy is RetryPolicy.TRANSIENT:
            return is_transient(error)
        return True

    async def submit(self, report: IncidentReport) -> SubmissionOutcome:
        """Deliver a report, retrying failed attempts.

        Waits ``backoff_seconds * n`` after failed attempt ``n``. Returns on
        the first success; otherwise returns a Failure carrying the last
        error's kind and its user-facing message.
        """
        self.state = SubmissionState.IDLE
        self.attempt_number = 0
        last_error: ReportError = UnexpectedError()

        try:
            for n in range(1, self.max_attempts + 1):
                self.state = SubmissionState.ATTEMPTING
                self.attempt_number = n
                try:
                    text = await self._attempt(report)
                except ReportError as e:
                    last_error = e
                except Exception as e:
                    logger.exception("Unexpected error on attempt %d", n)
                    last_error = UnexpectedError(str(e) or None)
                else:
                    self.state = SubmissionState.SUCCEEDED
                    return Success(result=GuidanceResult(text=text), attempts=n)

                if n >= self.max_attempts or not self._should_retry(last_error):
                    break

                delay = self.backoff_seconds * n
                logger.warning(
                    "Submission attempt %d/%d failed (%s), retrying in %.1fs",
                    n,
                    self.max_attempts,
                    last_error.kind.value,
                    delay,
                )
                await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.state = SubmissionState.IDLE
            raise

        self.state = SubmissionState.FAILED
        logger.error(
            "Submission failed after %d attempt(s): %s",
            self.attempt_number,
            last_error.kind.value,
        )
        return Failure(
            kind=last_error.kind,
            message=user_message(last_error),
            attempts=self.attempt_number,
        )


def controller_from_settings(attempt: AttemptFn) -> SubmissionController:
    """Build a controller using the configured attempt count, backoff and policy."""
    settings = get_settings()
    return SubmissionController(
        attempt,
        max_attempts=settings.submit_max_attempts,
        backoff_seconds=settings.submit_backoff_seconds,
        retry_policy=RetryPolicy(settings.submit_retry_policy),
    )


async def validate_and_submit(
    attempt: AttemptFn,
    category: str | None,
    details: str | None,
    email: str | None = None,
) -> SubmissionOutcome:
    """Validate raw input, then submit it through a configured controller.

    Validation failures are returned immediately, before any attempt runs.
    """
    try:
        report = validate_report(category, details, email)
    except ReportValidationError as e:
        return Failure(kind=ErrorKind.VALIDATION, message=user_message(e), attempts=0)

    return await controller_from_settings(attempt).submit(report)
