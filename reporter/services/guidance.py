"""Server-side incident analysis: prompt selection plus one gateway call."""

import logging

from reporter.models.report import IncidentReport
from reporter.services.llm import request_guidance
from reporter.services.prompts import build_user_message, select_prompt

logger = logging.getLogger(__name__)


async def generate_guidance(report: IncidentReport) -> str:
    """Ask the AI gateway for remediation guidance on a validated report."""
    logger.info("Processing report for category: %s", report.category.value)
    return await request_guidance(
        select_prompt(report.category),
        build_user_message(report.details, report.email),
    )
