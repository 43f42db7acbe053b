# plant_identifier/client/capture.py
"""Image acquisition for the page: browser snapshot, local camera (OpenCV) or file upload.

Both sources produce the same ``CapturedImage`` triple: the base64 payload,
its MIME type and a ``data:`` URI used as preview.
"""
import base64
import logging
import mimetypes
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from pathlib import Path
from typing import Callable, Dict, Optional, Union

import cv2
import numpy as np
from PIL import Image

from plant_identifier.errors import DeviceError
from plant_identifier.i18n import get_messages

logger = logging.getLogger(__name__)


class CaptureMode(str, Enum):
    CAMERA = "camera"
    UPLOAD = "upload"


@dataclass(frozen=True)
class CapturedImage:
    base64_data: str
    mime_type: str
    preview: str


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def captured_from_bytes(data: bytes, mime_type: str) -> CapturedImage:
    """Build the triple the same way a browser FileReader data URI is split."""
    preview = to_data_uri(data, mime_type)
    return CapturedImage(base64_data=preview.split(",", 1)[1], mime_type=mime_type, preview=preview)


class CameraStream:
    """One OpenCV video device, opened at a preferred resolution."""

    def __init__(
        self,
        device_index: int = 0,
        width: int = 1280,
        height: int = 720,
        capture_factory: Callable = cv2.VideoCapture,
    ):
        self.device_index = device_index
        self.width = width
        self.height = height
        self.capture_factory = capture_factory
        self._capture = None

    @property
    def is_open(self) -> bool:
        return self._capture is not None

    def open(self) -> None:
        if self._capture is not None:
            return
        try:
            capture = self.capture_factory(self.device_index)
        except cv2.error as e:
            raise DeviceError(f"cannot open camera {self.device_index}: {e}") from e
        if not capture.isOpened():
            capture.release()
            raise DeviceError(f"camera {self.device_index} is unavailable or access was denied")
        # Preferred, not guaranteed: the driver picks the closest mode
        try:
            capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
            capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        except cv2.error as e:
            capture.release()
            raise DeviceError(f"camera {self.device_index} rejected the resolution: {e}") from e
        self._capture = capture
        logger.info(f"Camera {self.device_index} opened")

    def read_rgb(self) -> np.ndarray:
        """Grab the current frame at the native stream resolution, as RGB."""
        if self._capture is None:
            raise DeviceError("camera is not open")
        try:
            ok, frame = self._capture.read()
            if not ok or frame is None:
                raise DeviceError(f"camera {self.device_index} returned no frame")
            return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        except cv2.error as e:
            raise DeviceError(f"camera {self.device_index} read failed: {e}") from e

    def release(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info(f"Camera {self.device_index} released")


class CaptureWidget:
    """Camera/upload widget feeding ``on_image_select`` with captured images.

    With a ``CameraStream`` the camera path reads a local OpenCV device; the
    stream is the only device handle held and is released when switching to
    upload mode, after every capture attempt and on ``close()``. Without one,
    camera mode expects browser snapshots passed to ``capture_snapshot``.
    """

    def __init__(
        self,
        on_image_select: Callable[[CapturedImage], None],
        camera: Optional[CameraStream] = None,
        messages: Optional[Dict[str, str]] = None,
        jpeg_quality: int = 92,
    ):
        self.on_image_select = on_image_select
        self.camera = camera
        self.messages = messages or get_messages()
        self.jpeg_quality = jpeg_quality
        self.mode = CaptureMode.UPLOAD
        self.disabled = False
        self.error: Optional[str] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def camera_active(self) -> bool:
        return self.camera is not None and self.camera.is_open

    def set_mode(self, mode: CaptureMode) -> None:
        mode = CaptureMode(mode)
        if mode == self.mode and (mode == CaptureMode.UPLOAD or self.camera is None or self.camera_active):
            return
        self.stop_camera()
        self.mode = mode
        if mode == CaptureMode.CAMERA:
            self.start_camera()

    def start_camera(self) -> bool:
        """Open the camera; on failure show a message and fall back to upload."""
        self.error = None
        if self.camera is not None:
            try:
                self.camera.open()
            except DeviceError as e:
                self._fall_back_to_upload(e)
                return False
        self.mode = CaptureMode.CAMERA
        return True

    def stop_camera(self) -> None:
        if self.camera is not None:
            self.camera.release()

    def live_frame(self) -> Optional[np.ndarray]:
        """Current RGB frame for the live preview, None outside local camera mode.

        A stream released between page runs is reopened here.
        """
        if self.camera is None or self.mode != CaptureMode.CAMERA:
            return None
        if not self.camera_active and not self.start_camera():
            return None
        try:
            return self.camera.read_rgb()
        except DeviceError as e:
            self._fall_back_to_upload(e)
            return None

    def capture(self) -> Optional[CapturedImage]:
        """Freeze the current frame, encode it as JPEG and stop the stream."""
        if self.disabled or not self.camera_active:
            return None
        try:
            frame = self.camera.read_rgb()
        except DeviceError as e:
            self._fall_back_to_upload(e)
            return None
        finally:
            self.stop_camera()
        return self._emit_jpeg(Image.fromarray(frame))

    def capture_snapshot(self, data: bytes) -> Optional[CapturedImage]:
        """Browser camera path: re-encode a snapshot (e.g. ``st.camera_input``) as JPEG."""
        if self.disabled or self.mode != CaptureMode.CAMERA:
            return None
        try:
            with Image.open(BytesIO(data)) as snapshot:
                picture = snapshot.convert("RGB")
        except OSError as e:
            self._fall_back_to_upload(DeviceError(f"unreadable camera snapshot: {e}"))
            return None
        return self._emit_jpeg(picture)

    def select_file(self, filename: str, data: bytes, content_type: Optional[str] = None) -> Optional[CapturedImage]:
        """Upload path for a dropped or selected file. Non-image files are ignored."""
        if self.disabled:
            return None
        mime_type = content_type or mimetypes.guess_type(filename)[0] or ""
        if not mime_type.startswith("image/"):
            logger.debug(f"Ignoring {filename!r} with type {mime_type!r}")
            return None

        image = captured_from_bytes(data, mime_type)
        self.on_image_select(image)
        return image

    def select_path(self, path: Union[str, Path]) -> Optional[CapturedImage]:
        if self.disabled:
            return None
        path = Path(path)
        mime_type = mimetypes.guess_type(path.name)[0] or ""
        if not mime_type.startswith("image/"):
            return None
        return self.select_file(path.name, path.read_bytes(), mime_type)

    def close(self) -> None:
        self.stop_camera()

    def _emit_jpeg(self, picture: Image.Image) -> CapturedImage:
        buffer = BytesIO()
        picture.save(buffer, format="JPEG", quality=self.jpeg_quality)
        image = captured_from_bytes(buffer.getvalue(), "image/jpeg")
        self.on_image_select(image)
        return image

    def _fall_back_to_upload(self, error: DeviceError) -> None:
        logger.warning(f"Camera unavailable, falling back to upload: {error}")
        self.stop_camera()
        self.error = self.messages["camera_error"]
        self.mode = CaptureMode.UPLOAD
