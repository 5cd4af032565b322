import logging
from urllib.parse import quote

import httpx
from cachetools import TTLCache

import config
from errors import NotFound, UpstreamFailure

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 1100
MIN_PREFERRED_CHARS = 800


def normalize_topic(topic: str) -> str:
    return topic.strip().lower()


def trim_content(content: str) -> str:
    """
    Caps the summary at MAX_CONTENT_CHARS, cutting back to the last full
    sentence when that still leaves at least MIN_PREFERRED_CHARS.
    """
    if not content:
        return ""
    if len(content) <= MAX_CONTENT_CHARS:
        return content

    trimmed = content[:MAX_CONTENT_CHARS]
    last_sentence_end = trimmed.rfind(".")
    if last_sentence_end >= MIN_PREFERRED_CHARS:
        trimmed = trimmed[: last_sentence_end + 1]
    return trimmed


class WikiClient:
    """Fetches topic summaries from the encyclopedia REST API, with a TTL cache."""

    def __init__(
        self,
        endpoint: str = config.WIKI_ENDPOINT,
        timeout: float = config.WIKI_TIMEOUT_SECONDS,
        ttl: float = config.WIKI_CACHE_TTL_SECONDS,
        maxsize: int = config.WIKI_CACHE_MAXSIZE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl)

    async def fetch_summary(self, topic: str) -> str:
        key = normalize_topic(topic)
        cached = self._cache.get(key)
        if cached:
            return cached

        url = f"{self.endpoint}{quote(topic, safe='')}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={"User-Agent": config.WIKI_USER_AGENT},
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFound(f"No summary found for topic: {topic}")
            logger.warning("Summary fetch for %r failed: %s", topic, e)
            raise UpstreamFailure(
                "Failed to fetch topic data from encyclopedia",
                details={"cause": str(e)},
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Summary fetch for %r failed: %s", topic, e)
            raise UpstreamFailure(
                "Failed to fetch topic data from encyclopedia",
                details={"cause": str(e) or type(e).__name__},
            ) from e

        extract = (data.get("extract") or data.get("description")) if isinstance(data, dict) else None
        if not extract:
            raise NotFound(f"No sufficient content found for topic: {topic}")

        trimmed = trim_content(extract)
        self._cache[key] = trimmed
        return trimmed
