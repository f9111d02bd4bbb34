"""Upload validation and vision-model analysis of tank photos."""

from __future__ import annotations

import base64
import logging
from datetime import datetime, timezone

from pydantic import BaseModel, ValidationError
from pydantic_ai.exceptions import UnexpectedModelBehavior

from aquarium_analyser.agents.base_agent import BaseAgent
from aquarium_analyser.agents.tank_analyst import (
    AlgaeAnalystAgent,
    FishHealthAnalystAgent,
    TankImageInput,
)
from aquarium_analyser.config import Settings, settings
from aquarium_analyser.core.exceptions import (
    AnalysisValidationError,
    APIKeyMissingError,
    InvalidUploadError,
)
from aquarium_analyser.schemas.analysis import (
    AlgaeAnalysisResult,
    AnalysisKind,
    AnalysisResponse,
    FishHealthResult,
)

logger = logging.getLogger(__name__)

IMAGE_REF_CHARS = 100

_RESULT_TYPES: dict[AnalysisKind, type[BaseModel]] = {
    "algae": AlgaeAnalysisResult,
    "fish": FishHealthResult,
}


def truncated_image_ref(payload: bytes, media_type: str) -> str:
    """Short data-URL prefix identifying the upload without storing it."""
    encoded = base64.b64encode(payload[: IMAGE_REF_CHARS]).decode("ascii")[:IMAGE_REF_CHARS]
    return f"data:{media_type};base64,{encoded}"


class TankAnalysisService:
    """Validate uploads, call the matching vision agent and validate its answer."""

    def __init__(
        self,
        app_settings: Settings | None = None,
        *,
        agents: dict[AnalysisKind, BaseAgent] | None = None,
    ) -> None:
        self.settings = app_settings or settings
        self._agents: dict[AnalysisKind, BaseAgent] = dict(agents or {})

    def _agent_for(self, kind: AnalysisKind) -> BaseAgent:
        agent = self._agents.get(kind)
        if agent is None:
            agent_cls = AlgaeAnalystAgent if kind == "algae" else FishHealthAnalystAgent
            agent = agent_cls(app_settings=self.settings)
            self._agents[kind] = agent
        return agent

    def validate_upload(self, payload: bytes | None, media_type: str | None) -> str:
        """Check an upload and return its normalized media type.

        Raises:
            InvalidUploadError: for missing, empty, oversized or non-image uploads.
        """
        if payload is None:
            raise InvalidUploadError("No image file provided")
        normalized = (media_type or "").split(";")[0].strip().lower()
        if normalized not in self.settings.upload_allowed_mime_types:
            raise InvalidUploadError("Only JPEG and PNG images are allowed")
        if not payload:
            raise InvalidUploadError("Uploaded image is empty")
        if len(payload) > self.settings.upload_max_bytes:
            raise InvalidUploadError("Uploaded image exceeds the maximum size", status_code=413)
        return normalized

    async def analyze(
        self,
        kind: AnalysisKind,
        payload: bytes | None,
        media_type: str | None,
    ) -> AnalysisResponse:
        """Analyze a tank photo.

        Raises:
            InvalidUploadError: if the upload is rejected.
            APIKeyMissingError: if no OpenAI API key is configured.
            AnalysisValidationError: if the model output does not match the schema.
        """
        normalized = self.validate_upload(payload, media_type)
        assert payload is not None
        if not self.settings.openai_api_key:
            raise APIKeyMissingError("OpenAI")

        logger.info(
            "Tank analysis started",
            extra={"kind": kind, "media_type": normalized, "byte_size": len(payload)},
        )
        try:
            output = await self._agent_for(kind).run(
                TankImageInput(payload=payload, media_type=normalized)
            )
            result = _RESULT_TYPES[kind].model_validate(
                output.model_dump() if isinstance(output, BaseModel) else output
            )
        except ValidationError as e:
            raise AnalysisValidationError("Invalid analysis result format", e.errors()) from e
        except UnexpectedModelBehavior as e:
            raise AnalysisValidationError("Invalid analysis result format", [str(e)]) from e

        logger.info("Tank analysis completed", extra={"kind": kind})
        return AnalysisResponse(
            kind=kind,
            result=result,
            image_ref=truncated_image_ref(payload, normalized),
            created_at=datetime.now(timezone.utc),
        )
