"""Google Gemini API wrapper with error handling."""

import logging

from google import genai
from google.genai import types

from config import settings
from services.json_recovery import recover_json

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


async def generate_text(prompt: str, temperature: float | None = None) -> str | None:
    """Send a prompt to Gemini and return the raw completion text."""
    client = get_client()
    if client is None:
        return None

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=settings.gemini_temperature if temperature is None else temperature,
                max_output_tokens=settings.gemini_max_output_tokens,
            ),
        )
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None

    text = response.text
    if not text:
        logger.error("Gemini returned an empty response")
        return None
    return text


async def generate_json(prompt: str) -> dict | None:
    """Send a prompt to Gemini and recover the JSON object in the response.

    Returns None when Gemini is unavailable; raises ParseFailure when it
    answered with something that holds no usable JSON.
    """
    text = await generate_text(prompt)
    if text is None:
        return None
    return recover_json(text)
