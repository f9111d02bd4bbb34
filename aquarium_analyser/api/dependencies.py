"""Request-scoped access to the services built at application startup."""

from typing import Annotated

from fastapi import Depends, Request

from aquarium_analyser.services.articles.pipeline import ArticleService
from aquarium_analyser.services.tank_analysis import TankAnalysisService


def get_article_service(request: Request) -> ArticleService:
    """Return the process-wide article service stored on app state."""
    return request.app.state.article_service


def get_tank_analysis_service(request: Request) -> TankAnalysisService:
    """Return the tank analysis service stored on app state."""
    return request.app.state.tank_analysis_service


ArticleServiceDep = Annotated[ArticleService, Depends(get_article_service)]
TankAnalysisServiceDep = Annotated[TankAnalysisService, Depends(get_tank_analysis_service)]
