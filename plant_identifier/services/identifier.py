# plant_identifier/services/identifier.py
import asyncio
import base64
import binascii
import logging
import time
from functools import lru_cache
from typing import Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from plant_identifier.config import get_settings
from plant_identifier.errors import BadRequest, UpstreamError
from plant_identifier.i18n import get_messages
from plant_identifier.models.plant import Plant
from plant_identifier.services.prompt import RESPONSE_SCHEMA, build_prompt

logger = logging.getLogger(__name__)

SUPPORTED_CONTENT_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp"]


class GeminiModelClient:
    """Sends one image plus one instruction to Gemini and returns the raw JSON text."""

    def __init__(self, api_key: Optional[str], model_name: str, client: Optional[genai.Client] = None):
        self.api_key = api_key
        self.model_name = model_name
        self._client = client

    def _get_client(self):
        # Created on first use so the API starts without a credential
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        response = await self._get_client().aio.models.generate_content(
            model=self.model_name,
            contents=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                prompt,
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
            ),
        )
        return response.text or ""


class PlantIdentifierService:
    """Validates the request, calls the model once and validates its answer."""

    def __init__(
        self,
        model_client,
        locale: str = "pt-BR",
        timeout_seconds: float = 60.0,
        max_upload_size: int = 10 * 1024 * 1024,
    ):
        self.model_client = model_client
        self.locale = locale
        self.timeout_seconds = timeout_seconds
        self.max_upload_size = max_upload_size
        self.messages = get_messages(locale)
        self.prompt = build_prompt(locale)

    def decode_input(self, image: Optional[str], mime_type: Optional[str]) -> bytes:
        """Check the client input and return the decoded image bytes.

        Raises:
            BadRequest: missing fields, unsupported MIME type, data that is
                not base64 or an image above the size limit.
        """
        if not image or not mime_type:
            raise BadRequest(self.messages["error_missing_input"], "image or mimeType missing")

        if mime_type not in SUPPORTED_CONTENT_TYPES:
            raise BadRequest(self.messages["error_invalid_mime"], f"unsupported mimeType {mime_type!r}")

        try:
            image_bytes = base64.b64decode(image, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BadRequest(self.messages["error_invalid_image"], f"invalid base64 payload: {e}")

        if not image_bytes:
            raise BadRequest(self.messages["error_invalid_image"], "empty image payload")

        if len(image_bytes) > self.max_upload_size:
            raise BadRequest(
                self.messages["error_image_too_large"].format(max_mb=self.max_upload_size // 1024 // 1024),
                f"image has {len(image_bytes)} bytes",
            )

        return image_bytes

    def parse_plant(self, raw: str) -> Plant:
        """Validate the model output against the Plant schema."""
        try:
            return Plant.model_validate_json(raw)
        except ValidationError as e:
            raise UpstreamError(self.messages["error_analysis_failed"], f"model output rejected: {e}")

    async def identify(self, image: Optional[str], mime_type: Optional[str]) -> Plant:
        image_bytes = self.decode_input(image, mime_type)
        start_time = time.time()

        try:
            raw = await asyncio.wait_for(
                self.model_client.generate(image_bytes, mime_type, self.prompt),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            raise UpstreamError(
                self.messages["error_analysis_failed"],
                f"model call exceeded {self.timeout_seconds}s",
            )
        except Exception as e:
            raise UpstreamError(self.messages["error_analysis_failed"], f"model call failed: {e!r}") from e

        plant = self.parse_plant(raw)

        processing_time = int((time.time() - start_time) * 1000)
        logger.info(
            "Identified image (%s, %d bytes) in %d ms: not_a_plant=%s confidence=%s",
            mime_type,
            len(image_bytes),
            processing_time,
            plant.not_a_plant,
            plant.confidence.value,
        )
        return plant


@lru_cache()
def get_identifier_service() -> PlantIdentifierService:
    """Return the identifier service with caching"""
    settings = get_settings()
    return PlantIdentifierService(
        model_client=GeminiModelClient(settings.GEMINI_API_KEY, settings.GEMINI_MODEL),
        locale=settings.LOCALE,
        timeout_seconds=settings.MODEL_TIMEOUT_SECONDS,
        max_upload_size=settings.MAX_UPLOAD_SIZE,
    )
