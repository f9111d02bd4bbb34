"""Tank image analysis schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

AnalysisKind = Literal["algae", "fish"]


class SpeciesName(BaseModel):
    """Common and scientific name pair."""

    common_name: str
    scientific_name: str


class AlgaeAnalysisResult(BaseModel):
    """Structured algae identification returned by the vision model."""

    algae_type: SpeciesName
    confidence: float = Field(ge=0, le=100)
    description: str = Field(description="Detailed physical traits (color, texture, growth)")
    causes: str = Field(description="Tank conditions like light, nutrients, CO2")
    identification_details: str = Field(description="How the algae was visually identified")
    treatment_plan: list[str] = Field(description="Ordered treatment steps")


class FishHealthResult(BaseModel):
    """Structured fish disease diagnosis returned by the vision model."""

    disease: SpeciesName
    confidence: float = Field(ge=0, le=100)
    symptoms: str = Field(description="Visible symptoms in the image")
    causes: str = Field(description="Likely causes of the condition")
    diagnosis_details: str = Field(description="How the condition was visually identified")
    treatment_plan: list[str] = Field(description="Ordered treatment steps")


class AnalysisResponse(BaseModel):
    """Schema for an analysis response.

    ``image_ref`` holds only a truncated data URL, never the full image.
    """

    kind: AnalysisKind
    result: AlgaeAnalysisResult | FishHealthResult
    image_ref: str
    created_at: datetime
