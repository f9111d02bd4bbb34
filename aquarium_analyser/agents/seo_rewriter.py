"""SEO rewrite agent that varies article prose while keeping its markup."""

import logging

from pydantic import BaseModel

from aquarium_analyser.agents.base_agent import BaseAgent

logger = logging.getLogger(__name__)


class SeoRewriteInput(BaseModel):
    """Input for the SEO rewrite agent."""

    html: str
    topic_name: str | None = None


class SeoRewriteAgent(BaseAgent[SeoRewriteInput, str]):
    """Rewrites scraped article HTML into unique prose for search engines."""

    temperature = 0.7

    @property
    def system_prompt(self) -> str:
        return """You are an SEO editor for an aquarium education website.
You receive an HTML article fragment and return a rewritten version of it.

Rules:
- Keep every HTML tag, attribute, id and class exactly as given, in the same order.
- Only rewrite the human-readable text between tags so it reads as original content.
- Keep facts, product names, numbers and the topic keywords intact.
- Do not touch the contents of <script> elements.
- Return only the HTML fragment, with no commentary and no markdown fences."""

    @property
    def output_type(self) -> type[str]:
        return str

    def _build_prompt(self, input_data: SeoRewriteInput) -> str:
        topic_line = f"Primary keyword: {input_data.topic_name}\n\n" if input_data.topic_name else ""
        return f"{topic_line}Rewrite this article HTML:\n\n{input_data.html}"
