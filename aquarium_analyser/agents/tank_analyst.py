"""Vision agents that identify algae and fish diseases from tank photos."""

import logging
from typing import Any

from pydantic import BaseModel
from pydantic_ai import BinaryContent

from aquarium_analyser.agents.base_agent import BaseAgent, Prompt
from aquarium_analyser.schemas.analysis import AlgaeAnalysisResult, FishHealthResult

logger = logging.getLogger(__name__)


class TankImageInput(BaseModel):
    """Raw uploaded photo."""

    payload: bytes
    media_type: str = "image/jpeg"


class _VisionAgent(BaseAgent[TankImageInput, BaseModel]):
    temperature = 0.2
    user_instruction: str = ""

    def _default_model(self) -> str:
        return self.settings.vision_model

    def _model_settings(self) -> dict[str, Any]:
        model_settings = super()._model_settings()
        model_settings.setdefault("max_tokens", self.settings.vision_max_tokens)
        return model_settings

    def _build_prompt(self, input_data: TankImageInput) -> Prompt:
        media_type = "image/jpeg" if input_data.media_type == "image/jpg" else input_data.media_type
        return [
            self.user_instruction,
            BinaryContent(data=input_data.payload, media_type=media_type),
        ]


class AlgaeAnalystAgent(_VisionAgent):
    """Identifies the algae species in an aquarium photo and plans treatment."""

    user_instruction = (
        "Please analyze this aquarium image and identify the algae type. Describe "
        "physical traits (color, texture, growth), tank conditions like light, nutrients "
        "and CO2 that cause it, how it was visually identified, and a step-by-step "
        "treatment plan. Confidence is a number from 0 to 100."
    )

    @property
    def system_prompt(self) -> str:
        return (
            "You are a planted tank expert with a PhD in aquatic plants. Carefully analyze "
            "the aquarium image, identify the algae species, and provide a precise 2-week "
            "action plan. Be extremely specific. Describe physical traits, causes, and "
            "unique identifiers. Maintain high confidence before concluding. Return a "
            "structured JSON response."
        )

    @property
    def output_type(self) -> type[AlgaeAnalysisResult]:
        return AlgaeAnalysisResult


class FishHealthAnalystAgent(_VisionAgent):
    """Identifies visible fish diseases in a photo and plans treatment."""

    user_instruction = (
        "Please analyze this fish image and identify any visible health issues or "
        "diseases. Describe the visible symptoms, likely causes, how the condition was "
        "visually identified, and a step-by-step treatment plan. Confidence is a number "
        "from 0 to 100."
    )

    @property
    def system_prompt(self) -> str:
        return (
            "You are a fish pathology expert with a PhD in aquatic veterinary medicine. "
            "Carefully analyze the image of the fish, identify any visible diseases or "
            "health issues, and provide a precise treatment plan. Be extremely specific. "
            "Describe visible symptoms, likely causes, and diagnostic details. Maintain "
            "high confidence before concluding. Return a structured JSON response."
        )

    @property
    def output_type(self) -> type[FishHealthResult]:
        return FishHealthResult
