"""Incident report models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class IncidentCategory(str, Enum):
    """The six incident classifications that drive prompt selection."""

    PHISHING = "phishing"
    RANSOMWARE = "ransomware"
    IDENTITY_THEFT = "identity_theft"
    DATA_BREACH = "data_breach"
    MALWARE = "malware"
    SOCIAL_ENGINEERING = "social_engineering"


class IncidentReport(BaseModel):
    """A validated incident report. Built by validate_report()."""

    model_config = ConfigDict(frozen=True)

    category: IncidentCategory
    details: str = Field(..., min_length=20, max_length=5000)
    email: str | None = Field(None, max_length=255)


class GuidanceResult(BaseModel):
    """AI-generated advice, treated as opaque display text."""

    text: str


class CategoryInfo(BaseModel):
    """Display metadata for category selection."""

    id: IncidentCategory
    name: str
    description: str


class ReportSubmission(BaseModel):
    """Raw report form submission.

    All fields are optional strings; validate_report() reports the first
    violated constraint.
    """

    category: str | None = None
    details: str | None = None
    email: str | None = None


class GuidanceResponse(BaseModel):
    """Successful analysis response."""

    response: str


class ErrorResponse(BaseModel):
    """Error body returned for every failed analysis."""

    error: str


CATEGORIES: list[CategoryInfo] = [
    CategoryInfo(
        id=IncidentCategory.PHISHING,
        name="Phishing Attack",
        description="Fraudulent emails or messages attempting to steal credentials or data",
    ),
    CategoryInfo(
        id=IncidentCategory.RANSOMWARE,
        name="Ransomware",
        description="Malicious software that encrypts data and demands payment",
    ),
    CategoryInfo(
        id=IncidentCategory.IDENTITY_THEFT,
        name="Identity Theft",
        description="Unauthorized use of personal information for fraudulent purposes",
    ),
    CategoryInfo(
        id=IncidentCategory.DATA_BREACH,
        name="Data Breach",
        description="Unauthorized access to sensitive or confidential information",
    ),
    CategoryInfo(
        id=IncidentCategory.MALWARE,
        name="Malware Infection",
        description="Malicious software designed to harm or exploit devices",
    ),
    CategoryInfo(
        id=IncidentCategory.SOCIAL_ENGINEERING,
        name="Social Engineering",
        description="Manipulation tactics to trick individuals into revealing information",
    ),
]
