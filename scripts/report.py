"""Submit an incident report from the command line.

Usage:
    python -m scripts.report --list-categories
    python -m scripts.report phishing "Received a suspicious email asking ..."
    python -m scripts.report malware "..." --email me@example.com --api-url http://localhost:8000
    python -m scripts.report ransomware "..." --direct   # call the AI gateway locally
"""

import argparse
import asyncio
import logging
import sys

from reporter.config import ConfigurationError, require_gateway_key
from reporter.models.report import CATEGORIES
from reporter.services.guidance import generate_guidance
from reporter.services.http_client import close_shared_client
from reporter.services.report_client import submit_report
from reporter.services.submission import (
    Failure,
    SubmissionOutcome,
    validate_and_submit,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="report", description="Get AI guidance for a cybersecurity incident."
    )
    parser.add_argument("category", nargs="?", help="Incident category id")
    parser.add_argument("details", nargs="?", help="Incident details (20-5000 chars)")
    parser.add_argument("--email", default="", help="Optional contact email")
    parser.add_argument("--api-url", default=None, help="Reporter API base URL")
    parser.add_argument(
        "--direct",
        action="store_true",
        help="Call the AI gateway directly instead of the reporter API",
    )
    parser.add_argument(
        "--list-categories", action="store_true", help="List categories and exit"
    )
    return parser.parse_args(argv)


async def _submit_direct(
    category: str | None, details: str | None, email: str
) -> SubmissionOutcome:
    """Submit straight to the AI gateway, bypassing the reporter API."""
    return await validate_and_submit(generate_guidance, category, details, email)


async def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    if args.list_categories:
        for info in CATEGORIES:
            print(f"  {info.id.value:<20} {info.name}: {info.description}")
        return 0

    if args.direct:
        try:
            require_gateway_key()
        except ConfigurationError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return 1
        outcome = await _submit_direct(args.category, args.details, args.email)
    else:
        try:
            outcome = await submit_report(
                args.category, args.details, args.email, base_url=args.api_url
            )
        finally:
            await close_shared_client()

    if isinstance(outcome, Failure):
        print(f"Error: {outcome.message}", file=sys.stderr)
        return 1

    print("\nAnalysis complete:\n")
    print(outcome.result.text)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
