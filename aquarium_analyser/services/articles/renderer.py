"""Deterministic HTML assembly for algae articles."""

from __future__ import annotations

import json
from datetime import date
from html import escape
from typing import Any

from aquarium_analyser.services.articles.extractor import (
    ExtractedArticle,
    ExtractionOutcome,
    element_text,
    heading_anchor,
)
from aquarium_analyser.services.articles.topics import TopicProfile

PUBLISHER_NAME = "Aquarium Analyser"
PUBLISHER_LOGO = "/images/logo.png"

ERROR_ARTICLE_HTML = (
    '<div class="p-8 text-center">'
    '<h1 class="text-2xl font-bold mb-4">Error Loading Article</h1>'
    "<p>We encountered an error while trying to load the article content. "
    "Please try again later.</p>"
    "</div>"
)


def _safe_text(value: Any) -> str:
    if value is None:
        return ""
    return escape(str(value), quote=True)


def render_error_article() -> str:
    """Return the fixed in-page error fragment."""
    return ERROR_ARTICLE_HTML


def _render_intro(profile: TopicProfile) -> str:
    name = _safe_text(profile.display_name)
    return (
        '<p class="text-lg font-medium leading-7 mb-6">'
        f"{name} ({_safe_text(profile.short_name)}), {_safe_text(profile.intro_clause)}. "
        f"This comprehensive guide will show you effective methods to control and "
        f"eliminate {name} from your tank, ensuring a healthier environment for your "
        "aquatic plants and fish."
        "</p>"
    )


def _render_fallback_body(profile: TopicProfile) -> str:
    parts: list[str] = []
    for section in profile.fallback_sections:
        heading = _safe_text(section.heading)
        parts.append(
            f'<h2 id="{heading_anchor(section.heading)}" class="text-2xl font-bold mt-8 mb-4">'
            f"{heading}</h2>"
        )
        parts.extend(f'<p class="mb-4">{_safe_text(p)}</p>' for p in section.paragraphs)
    return "".join(parts)


def _render_conclusion(profile: TopicProfile) -> str:
    name = _safe_text(profile.display_name)
    short = _safe_text(profile.short_name)
    return (
        '<h2 id="conclusion" class="text-2xl font-bold mt-8 mb-4">'
        "Conclusion: Your Path to an Algae-Free Aquarium</h2>"
        '<p class="mb-4">'
        f"Controlling {name} requires understanding the root causes and implementing a "
        "holistic approach to aquarium maintenance. By following the strategies outlined "
        f"in this guide, you can effectively combat {short} and prevent its return."
        "</p>"
        '<p class="mb-4">'
        "Remember, consistency is key when dealing with algae issues. Regular maintenance, "
        "proper CO2 levels, and balanced nutrients will help keep your aquarium healthy "
        "and beautiful."
        "</p>"
    )


def _render_cta() -> str:
    return (
        '<div class="bg-blue-50 dark:bg-blue-900 p-6 rounded-lg shadow-md mt-8 mb-4">'
        '<h3 class="text-xl font-semibold mb-4">Need More Help With Algae Problems?</h3>'
        '<p class="mb-4">'
        "Our Algae Analyzer tool can help identify various types of algae in your aquarium "
        "and provide customized treatment recommendations based on your specific situation."
        "</p>"
        '<a href="/" class="inline-block bg-blue-600 hover:bg-blue-700 text-white '
        'font-medium py-2 px-6 rounded-lg transition-colors">Try Our Algae Analyzer</a>'
        "</div>"
    )


def build_article_schema(
    profile: TopicProfile,
    *,
    image: str,
    published: date,
) -> dict[str, Any]:
    """Build the schema.org Article structured data."""
    organisation = {"@type": "Organization", "name": PUBLISHER_NAME}
    day = published.isoformat()
    return {
        "@context": "https://schema.org",
        "@type": "Article",
        "headline": profile.headline,
        "description": profile.description,
        "image": image,
        "author": organisation,
        "publisher": {
            **organisation,
            "logo": {"@type": "ImageObject", "url": PUBLISHER_LOGO},
        },
        "datePublished": day,
        "dateModified": day,
    }


def _render_schema_script(schema: dict[str, Any]) -> str:
    payload = json.dumps(schema, indent=2, ensure_ascii=False).replace("</", "<\\/")
    return f'<script type="application/ld+json">{payload}</script>'


def render_article(
    outcome: ExtractionOutcome,
    profile: TopicProfile,
    *,
    published: date,
) -> str:
    """Assemble the complete article fragment for one topic."""
    if isinstance(outcome, ExtractedArticle):
        first_paragraph = outcome.content.find("p")
        first_text = element_text(first_paragraph) if first_paragraph is not None else ""
        intro = ""
        if profile.display_name.lower() not in first_text.lower():
            intro = _render_intro(profile)
        body = intro + outcome.content.decode_contents()
    else:
        body = _render_fallback_body(profile)

    first_image = outcome.images[0].local_path if outcome.images else ""
    schema = build_article_schema(profile, image=first_image, published=published)

    return (
        '<div class="max-w-4xl mx-auto px-4 py-8">'
        f'<h1 class="text-3xl md:text-4xl font-bold mb-6">{_safe_text(outcome.title)}</h1>'
        '<div class="prose prose-lg dark:prose-invert max-w-none">'
        f"{body}{_render_conclusion(profile)}{_render_cta()}"
        "</div>"
        f"{_render_schema_script(schema)}"
        "</div>"
    )
