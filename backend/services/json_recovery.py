"""Recover a JSON object from noisy generative-model output.

Models wrap their JSON in prose ("Here is the JSON:"), markdown fences, or
emit several objects in a row. Two passes are tried:

1. Slice from the first ``{`` to the last ``}`` and parse.
2. Walk every ``{`` left to right and decode the first object that parses
   from that position.
"""

import json
import logging

from services.errors import ParseFailure

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()


def _outer_span(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start:end + 1].strip()


def _first_decodable(text: str) -> dict | None:
    pos = text.find("{")
    while pos != -1:
        try:
            value, _ = _decoder.raw_decode(text, pos)
        except json.JSONDecodeError:
            pos = text.find("{", pos + 1)
            continue
        if isinstance(value, dict):
            return value
        pos = text.find("{", pos + 1)
    return None


def recover_json(text: str) -> dict:
    """Return the first JSON object embedded in ``text``.

    Raises ParseFailure with reason ``no_json`` or ``malformed``.
    """
    if not isinstance(text, str):
        raise ParseFailure(ParseFailure.NO_JSON)

    candidate = _outer_span(text)
    if candidate is None:
        raise ParseFailure(ParseFailure.NO_JSON)

    try:
        value = json.loads(candidate)
        if isinstance(value, dict):
            return value
    except json.JSONDecodeError as e:
        logger.debug("Outer-span JSON parse failed: %s", e)

    value = _first_decodable(text)
    if value is not None:
        return value

    logger.warning("Model output contained a {...} span but no decodable object")
    raise ParseFailure(ParseFailure.MALFORMED)
