"""Tests for the submission controller: retry bound, backoff, policy, state."""

import asyncio
from unittest.mock import AsyncMock, call

import pytest

from reporter.models.report import IncidentCategory, IncidentReport
from reporter.services.errors import (
    USER_MESSAGES,
    ErrorKind,
    GatewayTimeoutError,
    NetworkError,
    PaymentRequiredError,
    RateLimitedError,
    ReportValidationError,
    UpstreamUnavailableError,
)
from reporter.services.submission import (
    Failure,
    RetryPolicy,
    SubmissionController,
    SubmissionState,
    Success,
    validate_and_submit,
)

REPORT = IncidentReport(
    category=IncidentCategory.PHISHING,
    details="Received a suspicious email asking for my bank password",
)


@pytest.mark.asyncio
async def test_first_success_short_circuits(no_sleep):
    attempt = AsyncMock(return_value="Do not click links...")
    controller = SubmissionController(attempt)

    outcome = await controller.submit(REPORT)

    assert isinstance(outcome, Success)
    assert outcome.result.text == "Do not click links..."
    assert outcome.attempts == 1
    attempt.assert_awaited_once_with(REPORT)
    no_sleep.assert_not_called()
    assert controller.state is SubmissionState.SUCCEEDED


@pytest.mark.asyncio
async def test_always_failing_makes_exactly_three_attempts(no_sleep):
    attempt = AsyncMock(side_effect=NetworkError())
    controller = SubmissionController(attempt)

    outcome = await controller.submit(REPORT)

    assert isinstance(outcome, Failure)
    assert outcome.kind is ErrorKind.NETWORK
    assert outcome.message == USER_MESSAGES[ErrorKind.NETWORK]
    assert outcome.attempts == 3
    assert attempt.await_count == 3
    assert controller.state is SubmissionState.FAILED
    assert controller.attempt_number == 3


@pytest.mark.asyncio
async def test_fail_twice_then_succeed(no_sleep):
    attempt = AsyncMock(
        side_effect=[RateLimitedError(), GatewayTimeoutError(), "guidance"]
    )
    controller = SubmissionController(attempt)

    outcome = await controller.submit(REPORT)

    assert isinstance(outcome, Success)
    assert outcome.result.text == "guidance"
    assert outcome.attempts == 3
    assert controller.state is SubmissionState.SUCCEEDED


@pytest.mark.asyncio
async def test_linear_backoff_between_attempts(no_sleep):
    attempt = AsyncMock(side_effect=NetworkError())
    await SubmissionController(attempt).submit(REPORT)

    assert no_sleep.await_args_list == [call(1.0), call(2.0)]


@pytest.mark.asyncio
async def test_backoff_scales_with_configured_base(no_sleep):
    attempt = AsyncMock(side_effect=NetworkError())
    await SubmissionController(attempt, backoff_seconds=0.5, max_attempts=4).submit(
        REPORT
    )

    assert no_sleep.await_args_list == [call(0.5), call(1.0), call(1.5)]


@pytest.mark.asyncio
async def test_failure_carries_last_error_kind(no_sleep):
    attempt = AsyncMock(
        side_effect=[NetworkError(), GatewayTimeoutError(), RateLimitedError()]
    )
    outcome = await SubmissionController(attempt).submit(REPORT)

    assert isinstance(outcome, Failure)
    assert outcome.kind is ErrorKind.RATE_LIMITED
    assert "busy" in outcome.message


@pytest.mark.asyncio
async def test_always_policy_retries_non_transient_errors(no_sleep):
    attempt = AsyncMock(side_effect=PaymentRequiredError())
    outcome = await SubmissionController(attempt).submit(REPORT)

    assert outcome.kind is ErrorKind.PAYMENT_REQUIRED
    assert attempt.await_count == 3


@pytest.mark.asyncio
async def test_validation_errors_are_never_retried(no_sleep):
    attempt = AsyncMock(side_effect=ReportValidationError(message="Bad input"))
    outcome = await SubmissionController(attempt).submit(REPORT)

    assert isinstance(outcome, Failure)
    assert outcome.kind is ErrorKind.VALIDATION
    assert outcome.message == "Bad input"
    assert attempt.await_count == 1
    no_sleep.assert_not_called()


class TestTransientPolicy:
    @pytest.mark.asyncio
    async def test_fails_fast_on_payment_required(self, no_sleep):
        attempt = AsyncMock(side_effect=PaymentRequiredError())
        controller = SubmissionController(attempt, retry_policy=RetryPolicy.TRANSIENT)

        outcome = await controller.submit(REPORT)

        assert outcome.kind is ErrorKind.PAYMENT_REQUIRED
        assert attempt.await_count == 1

    @pytest.mark.asyncio
    async def test_fails_fast_on_upstream_4xx(self, no_sleep):
        attempt = AsyncMock(side_effect=UpstreamUnavailableError(upstream_status=400))
        controller = SubmissionController(attempt, retry_policy="transient")

        await controller.submit(REPORT)

        assert attempt.await_count == 1

    @pytest.mark.parametrize(
        "error",
        [
            RateLimitedError(),
            GatewayTimeoutError(),
            NetworkError(),
            UpstreamUnavailableError(upstream_status=502),
            UpstreamUnavailableError(),
        ],
    )
    @pytest.mark.asyncio
    async def test_retries_transient_errors(self, no_sleep, error):
        attempt = AsyncMock(side_effect=error)
        controller = SubmissionController(attempt, retry_policy=RetryPolicy.TRANSIENT)

        await controller.submit(REPORT)

        assert attempt.await_count == 3


@pytest.mark.asyncio
async def test_unclassified_exception_becomes_unexpected(no_sleep):
    attempt = AsyncMock(side_effect=[RuntimeError("boom"), "guidance"])
    outcome = await SubmissionController(attempt).submit(REPORT)
    assert isinstance(outcome, Success)

    attempt = AsyncMock(side_effect=RuntimeError("boom"))
    outcome = await SubmissionController(attempt).submit(REPORT)
    assert isinstance(outcome, Failure)
    assert outcome.kind is ErrorKind.UNEXPECTED
    assert outcome.message == USER_MESSAGES[ErrorKind.UNEXPECTED]


@pytest.mark.asyncio
async def test_new_submission_resets_state(no_sleep):
    attempt = AsyncMock(side_effect=[NetworkError()] * 3 + ["guidance"])
    controller = SubmissionController(attempt)

    first = await controller.submit(REPORT)
    assert isinstance(first, Failure)
    assert controller.state is SubmissionState.FAILED

    second = await controller.submit(REPORT)
    assert isinstance(second, Success)
    assert second.attempts == 1
    assert controller.attempt_number == 1


@pytest.mark.asyncio
async def test_state_is_attempting_during_call(no_sleep):
    seen = []

    async def attempt(report):
        seen.append((controller.state, controller.attempt_number))
        return "guidance"

    controller = SubmissionController(attempt)
    assert controller.state is SubmissionState.IDLE
    await controller.submit(REPORT)

    assert seen == [(SubmissionState.ATTEMPTING, 1)]


@pytest.mark.asyncio
async def test_cancellation_propagates_and_returns_to_idle():
    started = asyncio.Event()

    async def attempt(report):
        started.set()
        await asyncio.sleep(10)
        return "never"

    controller = SubmissionController(attempt)
    task = asyncio.create_task(controller.submit(REPORT))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert controller.state is SubmissionState.IDLE


def test_rejects_zero_attempts():
    with pytest.raises(ValueError):
        SubmissionController(AsyncMock(), max_attempts=0)


class TestValidateAndSubmit:
    @pytest.mark.asyncio
    async def test_invalid_category_never_attempts(self, mock_settings, no_sleep):
        attempt = AsyncMock(return_value="guidance")

        outcome = await validate_and_submit(
            attempt, "made_up", "anything long enough to pass the 20 char check"
        )

        assert isinstance(outcome, Failure)
        assert outcome.kind is ErrorKind.VALIDATION
        assert outcome.attempts == 0
        assert "category" in outcome.message
        attempt.assert_not_called()

    @pytest.mark.asyncio
    async def test_uses_configured_attempts(self, mock_settings, no_sleep):
        mock_settings.submit_max_attempts = 2
        attempt = AsyncMock(side_effect=NetworkError())

        outcome = await validate_and_submit(
            attempt, "malware", "My laptop shows a ransom note on boot"
        )

        assert outcome.attempts == 2
        assert attempt.await_count == 2

    @pytest.mark.asyncio
    async def test_phishing_scenario_succeeds(self, mock_settings, no_sleep):
        attempt = AsyncMock(return_value="Do not click links...")

        outcome = await validate_and_submit(
            attempt,
            "phishing",
            "Received a suspicious email asking for my bank password",
            "",
        )

        assert isinstance(outcome, Success)
        assert outcome.result.text == "Do not click links..."
        report = attempt.await_args.args[0]
        assert report.category is IncidentCategory.PHISHING
        assert report.email is None
