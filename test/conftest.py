# test/conftest.py
import asyncio
import base64
import json
from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from plant_identifier.i18n import get_messages
from plant_identifier.models.plant import Plant
from plant_identifier.services.identifier import PlantIdentifierService


class FakeModelClient:
    """Stands in for GeminiModelClient; records every call."""

    def __init__(self, raw: str = "", error: Exception = None, delay: float = 0.0):
        self.raw = raw
        self.error = error
        self.delay = delay
        self.calls = []

    async def generate(self, image_bytes: bytes, mime_type: str, prompt: str) -> str:
        self.calls.append((image_bytes, mime_type, prompt))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.raw


class FakeVideoCapture:
    """Mimics cv2.VideoCapture with a fixed BGR frame."""

    def __init__(self, opened: bool = True, frame: np.ndarray = None,
                 read_error: Exception = None, set_error: Exception = None):
        self.opened = opened
        self.frame = frame
        self.read_error = read_error
        self.set_error = set_error
        self.props = {}
        self.released = False

    def isOpened(self):
        return self.opened

    def set(self, prop, value):
        if self.set_error is not None:
            raise self.set_error
        self.props[prop] = value
        return True

    def read(self):
        if self.read_error is not None:
            raise self.read_error
        if self.frame is None:
            return False, None
        return True, self.frame.copy()

    def release(self):
        self.released = True


class FakeCameraFactory:
    def __init__(self, **capture_kwargs):
        self.capture_kwargs = capture_kwargs
        self.devices = []

    def __call__(self, index):
        device = FakeVideoCapture(**self.capture_kwargs)
        self.devices.append((index, device))
        return device


@pytest.fixture
def messages():
    return get_messages("pt-BR")


@pytest.fixture
def fern_payload():
    """Model answer for a Boston fern photo"""
    return {
        "identified": True,
        "not_a_plant": False,
        "confidence": "high",
        "name": {
            "common": "Samambaia",
            "scientific": "Nephrolepis exaltata",
            "family": "Nephrolepidaceae",
        },
        "description": "Samambaia muito comum em interiores. Prefere sombra e umidade.",
        "toxicity": {
            "is_toxic": False,
            "toxic_to": [],
            "dangerous_parts": [],
            "symptoms": [],
            "severity": "none",
        },
        "edibility": {
            "is_edible": False,
            "edible_parts": [],
            "preparation": "",
            "warnings": [],
        },
    }


@pytest.fixture
def not_a_plant_payload():
    return {
        "identified": False,
        "not_a_plant": True,
        "confidence": "low",
        "name": {"common": "", "scientific": "", "family": ""},
        "description": "",
        "toxicity": {"is_toxic": False, "toxic_to": [], "dangerous_parts": [], "symptoms": [], "severity": "none"},
        "edibility": {"is_edible": False, "edible_parts": [], "preparation": "", "warnings": []},
    }


@pytest.fixture
def make_plant():
    def _make(payload: dict) -> Plant:
        return Plant.model_validate_json(json.dumps(payload))
    return _make


@pytest.fixture
def jpeg_bytes():
    buffer = BytesIO()
    Image.new("RGB", (16, 16), color=(34, 139, 34)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def jpeg_base64(jpeg_bytes):
    return base64.b64encode(jpeg_bytes).decode("ascii")


@pytest.fixture
def make_service():
    def _make(model_client, **kwargs) -> PlantIdentifierService:
        kwargs.setdefault("locale", "pt-BR")
        return PlantIdentifierService(model_client=model_client, **kwargs)
    return _make
