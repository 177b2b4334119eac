"""Client side of report submission: validate, post, classify, retry.

Usage:
    from reporter.services.report_client import submit_report

    outcome = await submit_report("phishing", "Received a suspicious email ...")
"""

import logging

import httpx

from reporter.config import get_settings
from reporter.models.report import IncidentReport
from reporter.services.errors import (
    GatewayTimeoutError,
    MalformedUpstreamResponseError,
    NetworkError,
    PaymentRequiredError,
    RateLimitedError,
    ReportError,
    ReportValidationError,
    UnexpectedError,
    UpstreamUnavailableError,
)
from reporter.services.http_client import api_headers, get_shared_client
from reporter.services.submission import SubmissionOutcome, validate_and_submit

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/reports/analyze"


def _error_text(resp: httpx.Response) -> str | None:
    """Return the server's ``error`` message, if the body carries one."""
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return None


def _classify_response(resp: httpx.Response) -> ReportError:
    """Map a non-200 reporter API response to a ReportError."""
    message = _error_text(resp)
    status = resp.status_code
    if status == 400:
        return ReportValidationError(message=message)
    if status == 429:
        return RateLimitedError(message)
    if status == 402:
        return PaymentRequiredError(message)
    if status == 504:
        return GatewayTimeoutError(message)
    if status >= 500:
        return UpstreamUnavailableError(message, upstream_status=status)
    return UnexpectedError(message)


async def analyze_remote(report: IncidentReport, base_url: str | None = None) -> str:
    """Send one report to the reporter API and return the guidance text.

    Raises:
        ReportError: Classified by HTTP status or transport failure.
    """
    base_url = (base_url or get_settings().reporter_api_url).rstrip("/")
    url = f"{base_url}{ANALYZE_PATH}"
    client = get_shared_client()
    try:
        resp = await client.post(
            url,
            headers=api_headers(),
            json=report.model_dump(mode="json"),
        )
    except httpx.TimeoutException as e:
        logger.warning("Reporter API timed out: %s", url)
        raise GatewayTimeoutError() from e
    except httpx.TransportError as e:
        logger.warning("Reporter API unreachable: %s (%s)", url, e)
        raise NetworkError() from e

    if resp.status_code != 200:
        logger.warning("Reporter API %d for %s", resp.status_code, url)
        raise _classify_response(resp)

    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedUpstreamResponseError() from e
    text = data.get("response") if isinstance(data, dict) else None
    if not isinstance(text, str):
        raise MalformedUpstreamResponseError()
    return text


async def submit_report(
    category: str | None,
    details: str | None,
    email: str | None = None,
    *,
    base_url: str | None = None,
) -> SubmissionOutcome:
    """Validate a report locally, then submit it to the API with retries.

    Validation failures return immediately without any network call.
    """

    async def _attempt(report: IncidentReport) -> str:
        return await analyze_remote(report, base_url=base_url)

    return await validate_and_submit(_attempt, category, details, email)
