"""DOM extraction for scraped algae articles.

Locates the article body, strips noise, rewrites images to local paths and
assigns heading anchors. The result is either an ``ExtractedArticle`` or a
``FallbackTemplate`` when the content selector matched nothing.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from aquarium_analyser.services.articles.topics import TopicProfile

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_SELECTOR = ".article__content"
NOISE_SELECTORS = (".share-buttons", "script", "style", "iframe", ".shopify-section")
RESPONSIVE_IMAGE_ATTRS = ("srcset", "data-srcset", "sizes", "data-sizes", "data-widths", "data-src")
IMAGE_CLASS = "w-full rounded-lg shadow-md"
HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

_NON_WORD_RUN = re.compile(r"[^\w]+", re.ASCII)


@dataclass(frozen=True, slots=True)
class ImageRef:
    """A discovered image and the local path it is served from."""

    original_source: str
    local_path: str


@dataclass(slots=True)
class ExtractedArticle:
    """Content subtree found by the primary selector."""

    title: str
    content: Tag
    images: list[ImageRef] = field(default_factory=list)


@dataclass(slots=True)
class FallbackTemplate:
    """No content matched; the static fallback body must be used."""

    title: str
    images: list[ImageRef] = field(default_factory=list)


ExtractionOutcome = ExtractedArticle | FallbackTemplate


def heading_anchor(text: str) -> str:
    """Slugify heading text into an anchor id.

    >>> heading_anchor("What Is BBA?")
    'what-is-bba'
    """
    return _NON_WORD_RUN.sub("-", text.lower()).strip("-")


def element_text(node: Tag) -> str:
    """Visible text of an element with inner whitespace collapsed to single spaces."""
    return " ".join(node.get_text().split())


def local_image_path(file_slug: str, index: int, url_prefix: str = "/images") -> str:
    return f"{url_prefix.rstrip('/')}/{file_slug}-image-{index}.jpg"


def extract_article(
    html: str,
    profile: TopicProfile,
    *,
    source_url: str,
    content_selector: str = DEFAULT_CONTENT_SELECTOR,
    images_url_prefix: str = "/images",
) -> ExtractionOutcome:
    """Parse ``html`` and prepare the article body for templating."""
    soup = BeautifulSoup(html, "lxml")

    title = ""
    first_h1 = soup.find("h1")
    if first_h1 is not None:
        title = element_text(first_h1)
    title = title or profile.headline

    content = soup.select_one(content_selector)
    if content is None:
        logger.info(
            "Content selector matched nothing, using fallback template",
            extra={"topic": profile.topic.value, "selector": content_selector},
        )
        return FallbackTemplate(title=title)

    _remove_noise(content)
    images = _rewrite_images(
        content,
        profile,
        source_url=source_url,
        images_url_prefix=images_url_prefix,
    )
    _annotate_headings(content, profile)

    logger.info(
        "Article extracted",
        extra={"topic": profile.topic.value, "title": title, "image_count": len(images)},
    )
    return ExtractedArticle(title=title, content=content, images=images)


def _remove_noise(content: Tag) -> None:
    for selector in NOISE_SELECTORS:
        for node in content.select(selector):
            node.decompose()


def _rewrite_images(
    content: Tag,
    profile: TopicProfile,
    *,
    source_url: str,
    images_url_prefix: str,
) -> list[ImageRef]:
    images: list[ImageRef] = []
    for img in content.find_all("img"):
        src = str(img.get("src") or img.get("data-src") or "").strip()
        if not src:
            continue

        index = len(images)
        local_path = local_image_path(profile.file_slug, index, images_url_prefix)
        images.append(ImageRef(original_source=urljoin(source_url, src), local_path=local_path))

        img["src"] = local_path
        img["alt"] = f"{profile.display_name} control - image {index + 1}"
        for attr in RESPONSIVE_IMAGE_ATTRS:
            if attr in img.attrs:
                del img[attr]
        img["class"] = IMAGE_CLASS
    return images


def _annotate_headings(content: Tag, profile: TopicProfile) -> None:
    # Collisions are left as-is; downstream anchors are not known to need uniqueness.
    for heading in content.find_all(HEADING_TAGS):
        text = element_text(heading)
        heading["id"] = heading_anchor(text)

        if heading.name == "h2":
            heading.string = f"{text} - {profile.display_name} Control"
        elif heading.name == "h3":
            heading.string = f"{text} for {profile.display_name} Treatment"
