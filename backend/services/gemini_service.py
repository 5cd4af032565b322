import asyncio
import json
import logging
from typing import Any

from google.generativeai.client import configure as genai_configure
from google.generativeai.generative_models import GenerativeModel
from google.generativeai.types import GenerationConfig

import config
from errors import EmptyResponse, RateLimited, Unconfigured, UpstreamFailure
from rate_limiter import SlidingWindowLimiter
from services.prompts import GenerationPrompt

logger = logging.getLogger(__name__)


class ModelClient:
    """
    Calls the Gemini generateContent endpoint for a single prompt.

    Every call first passes the admission window, then makes at most
    ``max_attempts`` attempts, each bounded by ``timeout`` seconds, with a
    fixed ``retry_delay`` between them.
    """

    def __init__(
        self,
        limiter: SlidingWindowLimiter,
        api_key: str = config.GEMINI_API_KEY,
        model_name: str = config.GEMINI_MODEL,
        timeout: float = config.MODEL_TIMEOUT_SECONDS,
        retry_delay: float = config.MODEL_RETRY_DELAY_SECONDS,
        max_attempts: int = config.MODEL_MAX_ATTEMPTS,
    ):
        self.limiter = limiter
        self.api_key = api_key
        self.model_name = model_name
        self.timeout = timeout
        self.retry_delay = retry_delay
        self.max_attempts = max_attempts
        if api_key:
            genai_configure(api_key=api_key)

    async def call(self, prompt: GenerationPrompt) -> dict:
        """Returns the raw response envelope: {candidates: [{content: {parts: [{text}]}}]}."""
        if not self.limiter.try_admit():
            logger.warning("Model call rejected: %d calls already in the window", self.limiter.in_window)
            raise RateLimited("AI rate limit exceeded, please retry shortly")

        if not self.api_key:
            raise Unconfigured("GEMINI_API_KEY is not configured")

        last_error: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await asyncio.wait_for(self._generate(prompt), timeout=self.timeout)
            except Exception as e:
                last_error = e
                if attempt < self.max_attempts:
                    logger.warning("Model call attempt %d failed: %s; retrying...", attempt, _describe(e))
                    await asyncio.sleep(self.retry_delay)

        logger.error("Model call failed after %d attempts: %s", self.max_attempts, _describe(last_error))
        raise UpstreamFailure(
            "Failed to generate study content",
            details={"cause": _describe(last_error)},
        ) from last_error

    async def _generate(self, prompt: GenerationPrompt) -> dict:
        model = GenerativeModel(
            self.model_name,
            system_instruction=prompt.system_text,
            generation_config=GenerationConfig(
                temperature=config.MODEL_TEMPERATURE,
                max_output_tokens=config.MODEL_MAX_OUTPUT_TOKENS,
            ),
        )
        response = await model.generate_content_async(
            prompt.user_text,
            request_options={"timeout": self.timeout},
        )
        return response.to_dict()


def _describe(error: BaseException | None) -> str:
    if error is None:
        return "unknown error"
    return str(error) or type(error).__name__


def extract_text(response: Any) -> str:
    """
    Pulls the generated text out of a response envelope, joining all parts
    of the first candidate.
    """
    candidates = response.get("candidates") if isinstance(response, dict) else None
    if not isinstance(candidates, list) or not candidates:
        raise EmptyResponse("AI generation returned no candidates")

    candidate = candidates[0] if isinstance(candidates[0], dict) else {}
    content = candidate.get("content") or {}
    parts = (content.get("parts") or []) if isinstance(content, dict) else []
    text = "".join(
        part["text"] for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ).strip()
    if not text:
        raise EmptyResponse("AI generation returned empty content")
    return text


def parse_json_text(text: str) -> Any:
    """Parses model output as JSON, tolerating a surrounding markdown code fence."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return json.loads(text.strip(), parse_constant=_reject_constant)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")
