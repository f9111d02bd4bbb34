"""Tank photo analysis API endpoints."""

import logging

from fastapi import APIRouter, File, UploadFile, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from aquarium_analyser.api.dependencies import TankAnalysisServiceDep
from aquarium_analyser.core.exceptions import AnalysisValidationError, InvalidUploadError
from aquarium_analyser.schemas.analysis import AnalysisKind, AnalysisResponse
from aquarium_analyser.services.tank_analysis import TankAnalysisService

logger = logging.getLogger(__name__)

router = APIRouter()

ANALYSIS_ERROR_MESSAGE = "Error analyzing image"


async def _analyze(
    kind: AnalysisKind,
    image: UploadFile | None,
    service: TankAnalysisService,
) -> AnalysisResponse | JSONResponse:
    try:
        payload = await image.read() if image is not None else None
        media_type = image.content_type if image is not None else None
        return await service.analyze(kind, payload, media_type)
    except InvalidUploadError as e:
        return JSONResponse(status_code=e.status_code, content={"message": e.message})
    except AnalysisValidationError as e:
        logger.warning("Analysis result failed validation", extra={"kind": kind, "errors": e.errors})
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"message": e.message, "errors": jsonable_encoder(e.errors)},
        )
    except Exception as e:
        logger.exception("Error analyzing image", extra={"kind": kind})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": ANALYSIS_ERROR_MESSAGE, "error": str(e) or type(e).__name__},
        )


@router.post(
    "/analyze-algae",
    response_model=AnalysisResponse,
    summary="Identify algae",
    description="Identify the algae in an uploaded aquarium photo and suggest a treatment plan.",
)
async def analyze_algae(
    service: TankAnalysisServiceDep,
    image: UploadFile | None = File(None),
) -> AnalysisResponse | JSONResponse:
    return await _analyze("algae", image, service)


@router.post(
    "/analyze-fish",
    response_model=AnalysisResponse,
    summary="Diagnose fish health",
    description="Identify visible fish diseases in an uploaded photo and suggest a treatment plan.",
)
async def analyze_fish(
    service: TankAnalysisServiceDep,
    image: UploadFile | None = File(None),
) -> AnalysisResponse | JSONResponse:
    return await _analyze("fish", image, service)
