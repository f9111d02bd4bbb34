"""Local storage for images referenced by scraped articles."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from aquarium_analyser.config import Settings, settings
from aquarium_analyser.services.articles.extractor import ImageRef

logger = logging.getLogger(__name__)


class ImageSource(Protocol):
    async def fetch_bytes(self, url: str) -> bytes: ...


class LocalImageStore:
    """Download article images into the public static directory.

    Downloads are best-effort: a failing image is logged and reported as a
    warning, while the rewritten ``src`` in the article stays in place.
    """

    def __init__(self, app_settings: Settings | None = None, *, public_dir: Path | None = None) -> None:
        self.settings = app_settings or settings
        self.public_dir = Path(public_dir or self.settings.public_dir)

    def path_for(self, local_path: str) -> Path:
        """Resolve a served URL path like ``/images/x.jpg`` to a file path."""
        return self.public_dir / local_path.lstrip("/")

    async def materialize(self, images: list[ImageRef], source: ImageSource) -> list[str]:
        """Download every image concurrently and return warnings for failures."""
        if not images:
            return []

        results = await asyncio.gather(
            *(self._download(image, source) for image in images),
        )
        warnings = [warning for warning in results if warning]

        logger.info(
            "Article images materialized",
            extra={
                "requested": len(images),
                "failed": len(warnings),
                "public_dir": str(self.public_dir),
            },
        )
        return warnings

    @staticmethod
    def _write_file(target: Path, payload: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)

    async def _download(self, image: ImageRef, source: ImageSource) -> str | None:
        target = self.path_for(image.local_path)
        try:
            payload = await source.fetch_bytes(image.original_source)
            await asyncio.to_thread(self._write_file, target, payload)
        except Exception as e:
            logger.warning(
                "Failed to download article image",
                extra={"url": image.original_source, "local_path": image.local_path, "error": str(e)},
            )
            return f"Image download failed for {image.original_source}: {e}"

        logger.debug(
            "Image saved",
            extra={"url": image.original_source, "path": str(target), "byte_size": len(payload)},
        )
        return None
