"""Algae article API endpoints."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from aquarium_analyser.api.dependencies import ArticleServiceDep
from aquarium_analyser.core.exceptions import ArticleFetchError
from aquarium_analyser.schemas.article import ArticleErrorResponse, ArticleResponse
from aquarium_analyser.services.articles.renderer import render_error_article
from aquarium_analyser.services.articles.topics import Topic

logger = logging.getLogger(__name__)

router = APIRouter()

ARTICLE_LOAD_ERROR_DETAIL = "Failed to load article content"


def _error_response(error: str) -> JSONResponse:
    payload = ArticleErrorResponse(error=error, content=render_error_article())
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=payload.model_dump(),
    )


@router.get(
    "/{topic}-article",
    response_model=ArticleResponse,
    responses={500: {"model": ArticleErrorResponse}},
    summary="Get algae article",
    description="Return the scraped, SEO-optimized article for one algae topic.",
)
async def get_article(topic: Topic, service: ArticleServiceDep) -> ArticleResponse | JSONResponse:
    """Serve the cached article, building it on first request."""
    try:
        article = await service.get_article(topic)
    except ArticleFetchError as e:
        logger.error("Article unavailable", extra={"topic": topic.value, "error": e.message})
        return _error_response(e.message)
    except Exception as e:
        logger.exception("Unexpected error building article", extra={"topic": topic.value})
        return _error_response(str(e) or ARTICLE_LOAD_ERROR_DETAIL)

    if article.warnings:
        logger.info(
            "Serving article with degraded parts",
            extra={"topic": topic.value, "warnings": article.warnings},
        )
    return ArticleResponse(content=article.html)
