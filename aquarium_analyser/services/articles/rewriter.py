"""SEO rewrite step with graceful fallback to the unmodified article."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from bs4 import BeautifulSoup

from aquarium_analyser.agents.seo_rewriter import SeoRewriteAgent, SeoRewriteInput
from aquarium_analyser.config import Settings

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)
_SCHEMA_MARKER = 'type="application/ld+json"'


@dataclass(slots=True)
class RewriteOutcome:
    """Result of a rewrite attempt."""

    html: str
    rewritten: bool
    warning: str | None = None


class ArticleRewriter(Protocol):
    """Narrow seam around the non-deterministic text generation call."""

    async def rewrite(self, html: str, *, topic_name: str | None = None) -> RewriteOutcome: ...


class PassthroughRewriter:
    """Rewriter used when SEO rewriting is disabled."""

    async def rewrite(self, html: str, *, topic_name: str | None = None) -> RewriteOutcome:
        return RewriteOutcome(html=html, rewritten=False)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence that models sometimes add."""
    stripped = text.strip()
    match = _CODE_FENCE.match(stripped)
    return match.group(1).strip() if match else stripped


def tag_skeleton(html: str) -> list[str]:
    """Return the tag names of the fragment's top two levels in document order."""
    soup = BeautifulSoup(html, "lxml")
    root = soup.body or soup
    skeleton: list[str] = []
    for child in root.find_all(recursive=False):
        skeleton.append(child.name)
        skeleton.extend(f"{child.name}>{grandchild.name}" for grandchild in child.find_all(recursive=False))
    return skeleton


def same_skeleton(original: str, rewritten: str) -> bool:
    return tag_skeleton(original) == tag_skeleton(rewritten)


class AgentArticleRewriter:
    """Rewrite article prose with an LLM, keeping the original on any failure."""

    def __init__(
        self,
        agent: SeoRewriteAgent | None = None,
        *,
        app_settings: Settings | None = None,
    ) -> None:
        self._agent = agent
        self._settings = app_settings

    @property
    def agent(self) -> SeoRewriteAgent:
        if self._agent is None:
            self._agent = SeoRewriteAgent(app_settings=self._settings)
        return self._agent

    async def rewrite(self, html: str, *, topic_name: str | None = None) -> RewriteOutcome:
        try:
            raw = await self.agent.run(SeoRewriteInput(html=html, topic_name=topic_name))
        except Exception as e:
            logger.warning(
                "SEO rewrite failed, keeping original article",
                extra={"topic": topic_name, "error": str(e) or type(e).__name__},
            )
            return RewriteOutcome(
                html=html,
                rewritten=False,
                warning=f"SEO rewrite failed: {str(e) or type(e).__name__}",
            )

        candidate = strip_code_fence(str(raw or ""))
        problem = self._validate(html, candidate)
        if problem:
            logger.warning(
                "SEO rewrite rejected, keeping original article",
                extra={"topic": topic_name, "reason": problem},
            )
            return RewriteOutcome(html=html, rewritten=False, warning=f"SEO rewrite rejected: {problem}")

        logger.info(
            "SEO rewrite applied",
            extra={"topic": topic_name, "original_length": len(html), "rewritten_length": len(candidate)},
        )
        return RewriteOutcome(html=candidate, rewritten=True)

    @staticmethod
    def _validate(original: str, candidate: str) -> str | None:
        if not candidate:
            return "empty response"
        if not candidate.startswith("<"):
            return "response is not HTML"
        if _SCHEMA_MARKER in original and _SCHEMA_MARKER not in candidate:
            return "structured data block was dropped"
        if not same_skeleton(original, candidate):
            return "tag structure changed"
        return None
