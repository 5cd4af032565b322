import logging
from fastapi import APIRouter, Depends, Request

import config
from errors import InvalidRequest
from models.schemas import STUDY_MODES, ErrorResponse, StudyResponse
from rate_limiter import limiter
from services.gemini_service import ModelClient
from services.study_service import handle_study_request
from services.wiki_service import WikiClient

logger = logging.getLogger(__name__)
router = APIRouter()


def get_model_client(request: Request) -> ModelClient:
    return request.app.state.model_client


def get_wiki_client(request: Request) -> WikiClient:
    return request.app.state.wiki_client


@router.get(
    "/study",
    responses={
        200: {"model": StudyResponse},
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
@limiter.limit(config.STUDY_RATE_LIMIT)
async def get_study_content(
    request: Request,
    topic: str | None = None,
    mode: str | None = None,
    wiki: WikiClient = Depends(get_wiki_client),
    model_client: ModelClient = Depends(get_model_client),
):
    """
    Summary, quiz and study tip for a topic, or a single math word problem
    when mode=math. Falls back to offline content if the model is unusable.
    """
    topic = (topic or "").strip()
    mode = (mode or "default").strip().lower()

    if not topic:
        raise InvalidRequest('Query parameter "topic" is required.')
    if mode not in STUDY_MODES:
        raise InvalidRequest('Invalid mode. Use "default" or "math".')

    logger.info("Study request topic=%r mode=%s", topic, mode)
    return await handle_study_request(topic, mode, wiki, model_client)
