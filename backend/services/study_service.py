import logging

from errors import (
    EmptyResponse,
    NotFound,
    RateLimited,
    Unconfigured,
    UpstreamFailure,
)
from services import validation
from services.fallback import build_fallback
from services.gemini_service import ModelClient, extract_text, parse_json_text
from services.prompts import build_prompt
from services.wiki_service import WikiClient

logger = logging.getLogger(__name__)

# Failures of the model path that are answered with fallback content
RECOVERABLE_ERRORS = (RateLimited, Unconfigured, UpstreamFailure, EmptyResponse, NotFound)


def _select_fields(mode: str, payload: dict) -> dict:
    if mode == "math":
        return {"mathQuestion": payload["mathQuestion"]}
    return {
        "summary": payload["summary"],
        "quiz": payload["quiz"],
        "studyTip": payload["studyTip"],
    }


async def generate_study_content(
    topic: str,
    source_text: str,
    mode: str,
    model_client: ModelClient,
) -> dict:
    """
    Produces study material for a topic: the model's validated output when it
    is usable, fallback content otherwise. Only unexpected errors escape.
    """
    prompt = build_prompt(mode, topic, source_text)

    try:
        response = await model_client.call(prompt)
    except RECOVERABLE_ERRORS as e:
        logger.warning("Model call for %r failed (%s: %s); using fallback", topic, e.kind, e.message)
        return build_fallback(topic, source_text, mode)

    try:
        parsed = parse_json_text(extract_text(response))
    except (EmptyResponse, ValueError) as e:
        logger.warning("Unusable model output for %r (%s); using fallback", topic, e)
        return build_fallback(topic, source_text, mode)

    try:
        validation.validate(mode, parsed)
    except UpstreamFailure as e:
        logger.warning("Model output for %r failed validation at %s: %s; using fallback",
                       topic, (e.details or {}).get("field"), e.message)
        return build_fallback(topic, source_text, mode)

    return _select_fields(mode, parsed)


async def handle_study_request(
    topic: str,
    mode: str,
    wiki: WikiClient,
    model_client: ModelClient,
) -> dict:
    """Fetches the source text for a topic and builds the response body."""
    source_text = await wiki.fetch_summary(topic)
    if not source_text:
        raise NotFound(f"No data found for topic: {topic}")

    payload = await generate_study_content(topic, source_text, mode, model_client)
    return {"status": "ok", "topic": topic, **payload}
