"""Tests for the SEO rewrite step and its fallback behaviour."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from aquarium_analyser.agents.seo_rewriter import SeoRewriteAgent, SeoRewriteInput
from aquarium_analyser.config import Settings
from aquarium_analyser.services.articles.extractor import FallbackTemplate
from aquarium_analyser.services.articles.renderer import render_article
from aquarium_analyser.services.articles.rewriter import (
    AgentArticleRewriter,
    PassthroughRewriter,
    same_skeleton,
    strip_code_fence,
    tag_skeleton,
)
from aquarium_analyser.services.articles.topics import Topic, get_topic_profile

BBA = get_topic_profile(Topic.BLACK_BEARD_ALGAE)
ARTICLE = render_article(FallbackTemplate(title=BBA.headline), BBA, published=date(2026, 1, 1))


class _FakeAgent:
    """Stands in for SeoRewriteAgent; replies are scripted per call."""

    def __init__(self, *replies: object) -> None:
        self.replies = list(replies)
        self.inputs: list[SeoRewriteInput] = []

    async def run(self, input_data: SeoRewriteInput) -> str:
        self.inputs.append(input_data)
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return str(reply)


def _reword(html: str, suffix: str) -> str:
    return html.replace("requires understanding", f"requires understanding {suffix}")


@pytest.mark.asyncio
async def test_rewrite_applies_structure_preserving_reply() -> None:
    agent = _FakeAgent(_reword(ARTICLE, "fully"))
    rewriter = AgentArticleRewriter(agent)  # type: ignore[arg-type]

    outcome = await rewriter.rewrite(ARTICLE, topic_name=BBA.display_name)

    assert outcome.rewritten is True
    assert outcome.warning is None
    assert "requires understanding fully" in outcome.html
    assert agent.inputs[0].topic_name == "Black Beard Algae"


@pytest.mark.asyncio
async def test_repeated_rewrites_may_differ_but_keep_skeleton() -> None:
    agent = _FakeAgent(_reword(ARTICLE, "first"), _reword(ARTICLE, "second"))
    rewriter = AgentArticleRewriter(agent)  # type: ignore[arg-type]

    first = await rewriter.rewrite(ARTICLE)
    second = await rewriter.rewrite(ARTICLE)

    assert first.html != second.html
    assert tag_skeleton(first.html) == tag_skeleton(ARTICLE) == tag_skeleton(second.html)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [RuntimeError("provider down"), asyncio.TimeoutError()],
)
async def test_rewrite_failure_returns_original_html(failure: BaseException) -> None:
    rewriter = AgentArticleRewriter(_FakeAgent(failure))  # type: ignore[arg-type]

    outcome = await rewriter.rewrite(ARTICLE)

    assert outcome.html == ARTICLE
    assert outcome.rewritten is False
    assert outcome.warning is not None
    assert outcome.warning.startswith("SEO rewrite failed")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [
        "",
        "Sorry, I can't help with that.",
        "<div><p>Totally different document</p></div>",
        ARTICLE.split("<script")[0] + "</div>",
    ],
)
async def test_malformed_reply_is_rejected(reply: str) -> None:
    rewriter = AgentArticleRewriter(_FakeAgent(reply))  # type: ignore[arg-type]

    outcome = await rewriter.rewrite(ARTICLE)

    assert outcome.html == ARTICLE
    assert outcome.rewritten is False
    assert outcome.warning is not None
    assert outcome.warning.startswith("SEO rewrite rejected")


@pytest.mark.asyncio
async def test_code_fenced_reply_is_unwrapped() -> None:
    rewriter = AgentArticleRewriter(_FakeAgent(f"```html\n{_reword(ARTICLE, 'x')}\n```"))  # type: ignore[arg-type]

    outcome = await rewriter.rewrite(ARTICLE)

    assert outcome.rewritten is True
    assert outcome.html.startswith("<div")


@pytest.mark.asyncio
async def test_missing_api_key_degrades_to_original(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    rewriter = AgentArticleRewriter(SeoRewriteAgent(model_override="openai:gpt-4o"))

    outcome = await rewriter.rewrite(ARTICLE)

    assert outcome.html == ARTICLE
    assert outcome.rewritten is False


@pytest.mark.asyncio
async def test_passthrough_rewriter_returns_input() -> None:
    outcome = await PassthroughRewriter().rewrite(ARTICLE)

    assert outcome.html == ARTICLE
    assert outcome.rewritten is False
    assert outcome.warning is None


def test_strip_code_fence() -> None:
    assert strip_code_fence("```html\n<p>a</p>\n```") == "<p>a</p>"
    assert strip_code_fence("  <p>a</p> ") == "<p>a</p>"


def test_same_skeleton_ignores_text_changes() -> None:
    assert same_skeleton("<div><h1>A</h1><p>b</p></div>", "<div><h1>X</h1><p>y</p></div>")
    assert not same_skeleton("<div><h1>A</h1><p>b</p></div>", "<div><p>y</p></div>")


@pytest.mark.asyncio
async def test_agent_run_is_bounded_by_configured_timeout() -> None:
    class _SlowModelAgent:
        async def run(self, prompt, model_settings=None):
            await asyncio.sleep(5)

    app_settings = Settings(_env_file=None, llm_timeout_seconds=0.01)
    agent = SeoRewriteAgent(model_override="openai:gpt-4o", app_settings=app_settings)
    agent._agent = _SlowModelAgent()  # type: ignore[assignment]

    with pytest.raises(asyncio.TimeoutError):
        await agent.run(SeoRewriteInput(html="<p>x</p>"))
