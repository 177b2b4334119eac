"""AI gateway client via the OpenAI-compatible chat completions API.

Usage:
    from reporter.services.llm import request_guidance

    text = await request_guidance(system_prompt, "Incident details: ...")
"""

import asyncio
import logging
from typing import Any

from openai import (
    APIConnectionError,
    APIResponseValidationError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    RateLimitError,
)

from reporter.config import get_settings, require_gateway_key
from reporter.services.errors import (
    GatewayTimeoutError,
    MalformedUpstreamResponseError,
    NetworkError,
    PaymentRequiredError,
    RateLimitedError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


def _get_client() -> AsyncOpenAI:
    """Create an async OpenAI client pointed at the AI gateway.

    SDK retries are disabled; retrying is the submission controller's job.
    """
    settings = get_settings()
    return AsyncOpenAI(
        base_url=settings.ai_gateway_url,
        api_key=require_gateway_key(settings),
        timeout=settings.ai_gateway_timeout,
        max_retries=0,
    )


def _extract_content(response: Any) -> str:
    """Pull the first completion's message text out of a response."""
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, KeyError, TypeError) as e:
        raise MalformedUpstreamResponseError() from e
    if not isinstance(content, str):
        raise MalformedUpstreamResponseError()
    return content


async def request_guidance(
    system_prompt: str,
    user_message: str,
    model: str | None = None,
) -> str:
    """Run one chat completion against the AI gateway.

    Args:
        system_prompt: Category instruction template.
        user_message: Rendered incident details.
        model: Override the configured model id.

    Returns:
        The assistant's response text.

    Raises:
        GatewayTimeoutError: No response within ai_gateway_timeout.
        RateLimitedError: Gateway answered 429.
        PaymentRequiredError: Gateway answered 402.
        UpstreamUnavailableError: Any other non-2xx, or a malformed body.
        NetworkError: The gateway could not be reached.
        ConfigurationError: No API key configured.
    """
    settings = get_settings()

    logger.info("Calling AI gateway (model=%s)", model or settings.ai_model)
    try:
        async with _get_client() as client:
            response = await asyncio.wait_for(
                client.chat.completions.create(
                    model=model or settings.ai_model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_message},
                    ],
                ),
                timeout=settings.ai_gateway_timeout,
            )
    except (asyncio.TimeoutError, APITimeoutError) as e:
        logger.error(
            "AI gateway timed out after %.1fs", settings.ai_gateway_timeout
        )
        raise GatewayTimeoutError() from e
    except RateLimitError as e:
        logger.error("AI gateway error: 429")
        raise RateLimitedError() from e
    except APIStatusError as e:
        logger.error("AI gateway error: %d %s", e.status_code, e.message)
        if e.status_code == 402:
            raise PaymentRequiredError() from e
        raise UpstreamUnavailableError(
            f"AI gateway error: {e.status_code}", upstream_status=e.status_code
        ) from e
    except APIConnectionError as e:
        logger.error("AI gateway unreachable: %s", e)
        raise NetworkError() from e
    except (APIResponseValidationError, ValueError) as e:
        logger.error("AI gateway returned an unparseable body: %s", e)
        raise MalformedUpstreamResponseError() from e

    text = _extract_content(response)
    logger.info("AI response generated successfully")
    return text
