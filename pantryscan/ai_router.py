# pantryscan/ai_router.py: the single outbound call to the vision model
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from .config import Settings
from .errors import ConfigurationError, GatewayError
from .validators import ImagePayload

logger = logging.getLogger(__name__)


def require_api_key(settings: Settings) -> str:
    if not settings.openai_api_key:
        logger.error("OPENAI_API_KEY not found in environment variables")
        raise ConfigurationError("OpenAI API key not configured")
    return settings.openai_api_key


def build_messages(prompt: str, image: ImagePayload) -> List[Dict[str, Any]]:
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": prompt},
                {
                    "type": "image_url",
                    # low detail keeps the call fast and cheap
                    "image_url": {"url": image.data_url, "detail": "low"},
                },
            ],
        }
    ]


def _first_content(rsp: Any) -> Optional[str]:
    choices = getattr(rsp, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None)


class OpenAIVisionGateway:
    """Sends prompt + image to the chat completions API and returns the raw text.

    No retries: a failed call is reported to the caller as a GatewayError.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    def _client(self) -> AsyncOpenAI:
        key = require_api_key(self._settings)
        return AsyncOpenAI(api_key=key, max_retries=0)

    async def complete(self, prompt: str, image: ImagePayload) -> str:
        client = self._client()
        try:
            # closes the client's connection pool once the call returns
            async with client:
                rsp = await client.chat.completions.create(
                    model=self._settings.model,
                    messages=build_messages(prompt, image),
                    max_tokens=self._settings.max_tokens,
                    temperature=self._settings.temperature,
                )
        except openai.APIStatusError as e:
            logger.error("OpenAI API Error: %s %r", e.status_code, e.body)
            raise GatewayError(
                f"OpenAI API error: {e.status_code}",
                status=e.status_code,
                details={"status": e.status_code, "body": e.body if e.body is not None else e.message},
            ) from e
        except openai.APIError as e:
            logger.error("OpenAI request failed: %s", e)
            raise GatewayError(
                f"OpenAI API error: {e.message}",
                details={"status": None, "body": e.message},
            ) from e

        content = _first_content(rsp)
        if not content:
            logger.error("No content in OpenAI response: %r", rsp)
            raise GatewayError("No content received from AI")

        logger.info("OpenAI response received successfully")
        return content
