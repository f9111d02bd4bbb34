"""Scrape, patch, localize and rewrite one algae article."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

from aquarium_analyser.config import Settings, settings
from aquarium_analyser.core.exceptions import ArticleFetchError
from aquarium_analyser.integrations.fetcher import ArticleFetcher
from aquarium_analyser.integrations.image_store import LocalImageStore
from aquarium_analyser.services.articles.cache import ArticleCache
from aquarium_analyser.services.articles.extractor import (
    ExtractedArticle,
    ImageRef,
    extract_article,
)
from aquarium_analyser.services.articles.renderer import render_article
from aquarium_analyser.services.articles.rewriter import (
    AgentArticleRewriter,
    ArticleRewriter,
    PassthroughRewriter,
)
from aquarium_analyser.services.articles.topics import Topic, get_topic_profile

logger = logging.getLogger(__name__)

ArticleVariant = Literal["extracted", "fallback_template"]


@dataclass(slots=True)
class ArticleResult:
    """Final article for one topic plus any non-fatal problems hit on the way."""

    topic: Topic
    html: str
    variant: ArticleVariant
    images: list[ImageRef] = field(default_factory=list)
    rewritten: bool = False
    warnings: list[str] = field(default_factory=list)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ArticlePipeline:
    """Runs Fetch -> Extract -> Assemble -> Images -> Rewrite for a topic."""

    def __init__(
        self,
        *,
        app_settings: Settings | None = None,
        fetcher_factory: Callable[[], ArticleFetcher] | None = None,
        image_store: LocalImageStore | None = None,
        rewriter: ArticleRewriter | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.settings = app_settings or settings
        self.fetcher_factory = fetcher_factory or (lambda: ArticleFetcher(self.settings))
        self.image_store = image_store or LocalImageStore(self.settings)
        if rewriter is None:
            if self.settings.seo_rewrite_enabled:
                rewriter = AgentArticleRewriter(app_settings=self.settings)
            else:
                rewriter = PassthroughRewriter()
        self.rewriter = rewriter
        self.clock = clock

    async def run(self, topic: Topic) -> ArticleResult:
        """Build the article for ``topic``.

        Raises:
            ArticleFetchError: if the source page cannot be fetched or parsed.
        """
        profile = get_topic_profile(topic)
        source_url = profile.source_url(self.settings.article_source_origin)
        t0 = time.perf_counter()
        logger.info("Article pipeline started", extra={"topic": topic.value, "url": source_url})

        async with self.fetcher_factory() as fetcher:
            html = await fetcher.fetch_html(source_url)

            try:
                outcome = extract_article(
                    html,
                    profile,
                    source_url=source_url,
                    content_selector=self.settings.article_content_selector,
                    images_url_prefix=self.settings.images_url_prefix,
                )
                assembled = render_article(outcome, profile, published=self.clock().date())
            except Exception as e:
                logger.exception("Failed to parse article page", extra={"url": source_url})
                raise ArticleFetchError(source_url, f"parse failed: {e}") from e

            warnings = await self.image_store.materialize(outcome.images, fetcher)

        rewrite = await self.rewriter.rewrite(assembled, topic_name=profile.display_name)
        if rewrite.warning:
            warnings.append(rewrite.warning)

        result = ArticleResult(
            topic=topic,
            html=rewrite.html,
            variant="extracted" if isinstance(outcome, ExtractedArticle) else "fallback_template",
            images=list(outcome.images),
            rewritten=rewrite.rewritten,
            warnings=warnings,
        )
        logger.info(
            "Article pipeline completed",
            extra={
                "topic": topic.value,
                "variant": result.variant,
                "image_count": len(result.images),
                "rewritten": result.rewritten,
                "warning_count": len(result.warnings),
                "duration_s": round(time.perf_counter() - t0, 2),
            },
        )
        return result


class ArticleService:
    """Serves cached articles, running the pipeline on first request per topic."""

    def __init__(
        self,
        pipeline: ArticlePipeline | None = None,
        cache: ArticleCache[Topic, ArticleResult] | None = None,
    ) -> None:
        self.pipeline = pipeline or ArticlePipeline()
        self.cache: ArticleCache[Topic, ArticleResult] = cache if cache is not None else ArticleCache()

    async def get_article(self, topic: Topic) -> ArticleResult:
        return await self.cache.get_or_build(topic, self.pipeline.run)
