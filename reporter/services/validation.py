"""Incident report validation.

Runs on both sides of the wire: the client validates before submitting and
the service validates again before calling the AI gateway.
"""

import re

from reporter.models.report import IncidentCategory, IncidentReport
from reporter.services.errors import ReportValidationError, ValidationKind

MIN_DETAILS_LENGTH = 20
MAX_DETAILS_LENGTH = 5000
MAX_EMAIL_LENGTH = 255

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_VALID_CATEGORIES = {c.value for c in IncidentCategory}


def sanitize_input(text: str) -> str:
    """Strip angle brackets and surrounding whitespace."""
    return re.sub(r"[<>]", "", text).strip()


def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.fullmatch(email) is not None


def validate_report(
    category: str | None,
    details: str | None,
    email: str | None = None,
) -> IncidentReport:
    """Validate raw form input and build an IncidentReport.

    Constraints are checked in order and the first violation is raised:
    missing field, invalid category, details length, email shape.

    Raises:
        ReportValidationError: naming the violated constraint.
    """
    if not category or not category.strip() or not details or not details.strip():
        raise ReportValidationError(
            ValidationKind.MISSING_FIELD,
            "Please select a category and describe the incident",
        )

    if category not in _VALID_CATEGORIES:
        raise ReportValidationError(
            ValidationKind.INVALID_CATEGORY,
            "Please select a valid incident category",
        )

    clean_details = sanitize_input(details)
    if len(clean_details) < MIN_DETAILS_LENGTH:
        raise ReportValidationError(
            ValidationKind.LENGTH_OUT_OF_RANGE,
            f"Incident details must be at least {MIN_DETAILS_LENGTH} characters",
        )
    if len(clean_details) > MAX_DETAILS_LENGTH:
        raise ReportValidationError(
            ValidationKind.LENGTH_OUT_OF_RANGE,
            f"Incident details must be at most {MAX_DETAILS_LENGTH} characters",
        )

    clean_email = (email or "").strip() or None
    if clean_email is not None and (
        len(clean_email) > MAX_EMAIL_LENGTH or not is_valid_email(clean_email)
    ):
        raise ReportValidationError(
            ValidationKind.INVALID_EMAIL,
            "Please enter a valid email address",
        )

    return IncidentReport(
        category=IncidentCategory(category),
        details=clean_details,
        email=clean_email,
    )
