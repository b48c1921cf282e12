"""
Motivational quote generation.

Asks Gemini for a short uplifting quote together with its own judgement of
whether the quote is positive. Only quotes flagged positive (and short
enough) reach the briefing; everything else resolves to one of two fixed
fallback quotes.
"""

import asyncio
import logging
from typing import Any

from google import genai
from pydantic import BaseModel, Field, ValidationError

from sunrise.config.defaults import (
    GENERATED_QUOTE_AUTHOR,
    GENERATION_FAILED_QUOTE,
    NON_POSITIVE_QUOTE,
)
from sunrise.config.schema import NavigatorConfig
from sunrise.models.briefing import MotivationalQuote

logger = logging.getLogger(__name__)

_PROMPT = """
    You are an AI assistant designed to generate motivational quotes.

    Generate a motivational quote, ensuring it is uplifting and positive.

    The quote should be no more than {max_words} words.

    Output whether the quote is subjectively positive in the isPositive field.
    {topic_line}
    Output Format:
    - Return a raw JSON object, no Markdown formatting.
    - Object schema: {{"quote": "string", "isPositive": true|false}}
    """

_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "quote": {"type": "STRING"},
        "isPositive": {"type": "BOOLEAN"},
    },
    "required": ["quote", "isPositive"],
}


class GeneratedQuote(BaseModel):
    quote: str = Field(min_length=1)
    is_positive: bool = Field(alias="isPositive")


class QuoteGenerator:
    def __init__(self, config: NavigatorConfig, client: Any | None = None):
        self.model = config.quote.model
        self.max_words = config.quote.max_words
        self.timeout = config.http.timeout_seconds
        self.client = client
        if self.client is None and config.keys.gemini_api_key:
            try:
                self.client = genai.Client(api_key=config.keys.gemini_api_key)
            except Exception as e:
                logger.error("Failed to initialize Gemini client: %s", e)
                self.client = None

    def build_prompt(self, topic: str | None = None) -> str:
        topic_line = f"\n    The quote should be about {topic}.\n" if topic else ""
        return _PROMPT.format(max_words=self.max_words, topic_line=topic_line)

    async def generate(self, topic: str | None = None) -> GeneratedQuote:
        """Raw generation; raises on any failure."""
        if self.client is None:
            raise RuntimeError("Gemini client not initialized (GEMINI_API_KEY missing?)")

        response = await asyncio.wait_for(
            self.client.aio.models.generate_content(
                model=self.model,
                contents=self.build_prompt(topic),
                config={
                    "response_mime_type": "application/json",
                    "response_schema": _RESPONSE_SCHEMA,
                },
            ),
            timeout=self.timeout,
        )
        return GeneratedQuote.model_validate_json(_strip_code_fence(response.text or ""))

    async def get_quote(self, topic: str | None = None) -> MotivationalQuote:
        """A quote for the briefing. Never raises."""
        try:
            result = await self.generate(topic)
        except (ValidationError, ValueError) as e:
            logger.error("Failed to parse generated quote: %s", e)
            return GENERATION_FAILED_QUOTE
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error generating motivational message: %s", e)
            return GENERATION_FAILED_QUOTE

        if not result.is_positive:
            logger.info("Generated quote flagged non-positive, using fallback")
            return NON_POSITIVE_QUOTE
        if len(result.quote.split()) > self.max_words:
            logger.info("Generated quote exceeds %d words, using fallback", self.max_words)
            return NON_POSITIVE_QUOTE
        return MotivationalQuote(quote=result.quote.strip(), author=GENERATED_QUOTE_AUTHOR)


def _strip_code_fence(text: str) -> str:
    """Gemini sometimes wraps JSON in a ```json block despite the mime type."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.split("\n", 1)[1] if "\n" in cleaned else ""
        if cleaned.endswith("```"):
            cleaned = cleaned.rsplit("```", 1)[0]
    return cleaned.strip()
