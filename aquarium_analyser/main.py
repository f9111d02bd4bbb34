"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from aquarium_analyser.api.v1.router import api_router
from aquarium_analyser.config import Settings, settings
from aquarium_analyser.core.logging import setup_logging
from aquarium_analyser.integrations.image_store import LocalImageStore
from aquarium_analyser.services.articles.pipeline import ArticlePipeline, ArticleService
from aquarium_analyser.services.tank_analysis import TankAnalysisService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    app_settings: Settings = app.state.settings
    setup_logging(app_settings)

    logger.info(
        "Starting Aquarium Analyser",
        extra={
            "environment": app_settings.environment,
            "version": app_settings.app_version,
            "vision_model": app_settings.vision_model,
            "rewrite_model": app_settings.rewrite_model,
            "seo_rewrite_enabled": app_settings.seo_rewrite_enabled,
            "public_dir": str(app_settings.public_dir),
        },
    )
    app_settings.images_dir.mkdir(parents=True, exist_ok=True)
    if not app_settings.openai_api_key:
        logger.error("OPENAI_API_KEY environment variable is required; model calls will fail")

    yield

    logger.info("Shutting down Aquarium Analyser")


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description=(
            "Algae and fish disease identification from tank photos, plus "
            "SEO-optimized algae control articles"
        ),
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # One cache per process; route handlers receive it through dependencies
    image_store = LocalImageStore(app_settings)
    app.state.article_service = ArticleService(
        ArticlePipeline(app_settings=app_settings, image_store=image_store)
    )
    app.state.tank_analysis_service = TankAnalysisService(app_settings)

    app.add_middleware(
        cast(Any, CORSMiddleware),
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=app_settings.api_prefix)

    app.mount(
        app_settings.images_url_prefix,
        StaticFiles(directory=app_settings.images_dir, check_dir=False),
        name="images",
    )

    @app.get(
        "/health",
        summary="Health check",
        description="Return service health status and backend version information.",
    )
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": app_settings.app_version}

    return app


app = create_app()
