"""Incident report analysis endpoints."""

import logging

from fastapi import APIRouter

from reporter.middleware import request_id_var
from reporter.models.report import (
    CATEGORIES,
    CategoryInfo,
    ErrorResponse,
    GuidanceResponse,
    ReportSubmission,
)
from reporter.services.errors import ReportError, UnexpectedError
from reporter.services.guidance import generate_guidance
from reporter.services.validation import validate_report

router = APIRouter(prefix="/reports", tags=["reports"])
logger = logging.getLogger(__name__)


@router.get("/categories", response_model=list[CategoryInfo])
async def list_categories():
    """List the incident categories a report can be filed under."""
    return CATEGORIES


@router.post(
    "/analyze",
    response_model=GuidanceResponse,
    responses={
        400: {"model": ErrorResponse},
        402: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def analyze_report(submission: ReportSubmission):
    """Validate an incident report and return AI remediation guidance.

    Makes a single gateway call; retrying is left to the client.
    """
    report = validate_report(
        submission.category, submission.details, submission.email
    )

    try:
        guidance = await generate_guidance(report)
    except ReportError:
        raise
    except Exception as e:
        logger.exception(
            "Error analyzing report [request_id=%s]", request_id_var.get()
        )
        raise UnexpectedError(str(e) or None) from e

    return GuidanceResponse(response=guidance)
