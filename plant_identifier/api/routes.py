# plant_identifier/api/routes.py
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from plant_identifier.config import get_settings, Settings
from plant_identifier.errors import IdentificationError, UpstreamError
from plant_identifier.models.plant import ErrorResponse, IdentifyRequest, IdentifyResponse
from plant_identifier.services.identifier import PlantIdentifierService, get_identifier_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/identify",
    response_model=IdentifyResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Identify the plant in an image",
    description="Send a base64 image and receive the plant identification with toxicity and edibility data",
)
async def identify_plant(
        payload: IdentifyRequest,
        identifier: PlantIdentifierService = Depends(get_identifier_service),
) -> IdentifyResponse:
    """
    API endpoint for plant identification.

    Args:
        payload: Base64 image data and its MIME type.
        identifier: Service that talks to the model.

    Returns:
        The validated plant wrapped in ``{"plant": ...}``.
    """
    try:
        plant = await identifier.identify(payload.image, payload.mimeType)
        return IdentifyResponse(plant=plant)

    except IdentificationError as exc:
        # Exception handler in main.py turns this into {"error": ...}
        logger.error(f"Identification rejected ({exc.status_code}): {exc.detail}", exc_info=exc.status_code >= 500)
        raise exc
    except Exception as e:
        logger.error(f"Unexpected error during identification: {str(e)}", exc_info=True)
        raise UpstreamError(identifier.messages["error_analysis_failed"], str(e))


@router.get(
    "/health",
    summary="API health status",
    description="Check if the identification service is available"
)
async def health_check(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return {
        "status": "healthy",
        "service": "plant-identifier",
        "version": "0.1.0",
        "model": settings.GEMINI_MODEL,
        "locale": settings.LOCALE,
        "credential_configured": bool(settings.GEMINI_API_KEY),
    }
