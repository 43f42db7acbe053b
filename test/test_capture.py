# test/test_capture.py
import base64
from io import BytesIO

import cv2
import numpy as np
import pytest
from PIL import Image

from plant_identifier.client.capture import CameraStream, CaptureMode, CaptureWidget

from conftest import FakeCameraFactory


@pytest.fixture
def frame():
    # Native stream resolution, BGR like OpenCV delivers it
    return np.full((720, 1280, 3), (200, 100, 0), dtype=np.uint8)


@pytest.fixture
def selected():
    return []


@pytest.fixture
def make_widget(selected, messages):
    def _make(factory: FakeCameraFactory) -> CaptureWidget:
        camera = CameraStream(device_index=2, capture_factory=factory)
        return CaptureWidget(on_image_select=selected.append, camera=camera, messages=messages)
    return _make


def test_selecting_an_image_file_emits_the_triple(make_widget, selected, jpeg_bytes):
    widget = make_widget(FakeCameraFactory())

    image = widget.select_file("folha.jpg", jpeg_bytes, "image/jpeg")

    assert selected == [image]
    assert image.mime_type == "image/jpeg"
    assert image.base64_data == base64.b64encode(jpeg_bytes).decode("ascii")
    assert image.preview == f"data:image/jpeg;base64,{image.base64_data}"


@pytest.mark.parametrize(
    "filename, content_type",
    [("notes.txt", "text/plain"), ("report.pdf", None), ("clip.mp4", "video/mp4"), ("noextension", None)],
)
def test_non_image_files_are_ignored(make_widget, selected, filename, content_type):
    widget = make_widget(FakeCameraFactory())

    assert widget.select_file(filename, b"not an image", content_type) is None
    assert selected == []


def test_type_is_guessed_from_the_name(make_widget, selected, jpeg_bytes):
    widget = make_widget(FakeCameraFactory())

    image = widget.select_file("planta.png", jpeg_bytes)

    assert image.mime_type == "image/png"


def test_select_path_reads_the_file(make_widget, selected, jpeg_bytes, tmp_path):
    widget = make_widget(FakeCameraFactory())
    photo = tmp_path / "orquidea.jpeg"
    photo.write_bytes(jpeg_bytes)
    text = tmp_path / "orquidea.txt"
    text.write_text("hello")

    assert widget.select_path(text) is None
    image = widget.select_path(photo)

    assert selected == [image]
    assert base64.b64decode(image.base64_data) == jpeg_bytes


def test_camera_capture_encodes_jpeg_and_releases_the_device(make_widget, selected, frame):
    factory = FakeCameraFactory(frame=frame)
    widget = make_widget(factory)

    widget.set_mode(CaptureMode.CAMERA)
    assert widget.camera_active
    index, device = factory.devices[0]
    assert index == 2
    assert sorted(device.props.values()) == [720, 1280]

    image = widget.capture()

    assert selected == [image]
    assert image.mime_type == "image/jpeg"
    assert image.preview.startswith("data:image/jpeg;base64,")
    decoded = Image.open(BytesIO(base64.b64decode(image.base64_data)))
    assert decoded.format == "JPEG"
    assert decoded.size == (1280, 720)
    # Stream stopped right after the capture
    assert device.released
    assert not widget.camera_active


def test_camera_denied_falls_back_to_upload(make_widget, selected, messages):
    factory = FakeCameraFactory(opened=False)
    widget = make_widget(factory)

    widget.set_mode(CaptureMode.CAMERA)

    assert widget.mode == CaptureMode.UPLOAD
    assert widget.error == messages["camera_error"]
    assert factory.devices[0][1].released
    assert widget.capture() is None
    assert selected == []


def test_frame_read_failure_during_capture_releases_and_falls_back(make_widget, selected, messages):
    factory = FakeCameraFactory(frame=None)
    widget = make_widget(factory)
    widget.set_mode(CaptureMode.CAMERA)

    assert widget.capture() is None

    assert factory.devices[0][1].released
    assert widget.mode == CaptureMode.UPLOAD
    assert widget.error == messages["camera_error"]
    assert selected == []


def test_switching_to_upload_stops_the_stream(make_widget, frame):
    factory = FakeCameraFactory(frame=frame)
    widget = make_widget(factory)

    widget.set_mode(CaptureMode.CAMERA)
    widget.set_mode(CaptureMode.UPLOAD)

    assert factory.devices[0][1].released
    assert not widget.camera_active

    # Back into camera mode opens a fresh stream
    widget.set_mode(CaptureMode.CAMERA)
    assert len(factory.devices) == 2
    assert widget.camera_active


def test_live_frame_is_rgb(make_widget, frame):
    widget = make_widget(FakeCameraFactory(frame=frame))
    assert widget.live_frame() is None

    widget.set_mode(CaptureMode.CAMERA)
    rgb = widget.live_frame()

    assert rgb.shape == (720, 1280, 3)
    assert tuple(int(v) for v in rgb[0, 0]) == (0, 100, 200)


def test_close_releases_an_active_stream(make_widget, frame):
    factory = FakeCameraFactory(frame=frame)

    with make_widget(factory) as widget:
        widget.set_mode(CaptureMode.CAMERA)
        assert widget.camera_active

    assert factory.devices[0][1].released


def test_disabled_widget_ignores_every_trigger(make_widget, selected, frame, jpeg_bytes, tmp_path):
    factory = FakeCameraFactory(frame=frame)
    widget = make_widget(factory)
    widget.set_mode(CaptureMode.CAMERA)
    widget.disabled = True
    photo = tmp_path / "flor.jpg"
    photo.write_bytes(jpeg_bytes)

    assert widget.capture() is None
    assert widget.select_file("flor.jpg", jpeg_bytes, "image/jpeg") is None
    assert widget.select_path(photo) is None
    assert selected == []
    # Capture was a no-op, the stream is still live
    assert widget.camera_active

    widget.close()


def test_backend_error_on_read_falls_back_to_upload(make_widget, selected, messages):
    factory = FakeCameraFactory(read_error=cv2.error("backend read failure"))
    widget = make_widget(factory)
    widget.set_mode(CaptureMode.CAMERA)

    assert widget.live_frame() is None
    assert widget.mode == CaptureMode.UPLOAD
    assert widget.error == messages["camera_error"]

    widget.set_mode(CaptureMode.CAMERA)
    assert widget.capture() is None

    assert factory.devices[1][1].released
    assert widget.mode == CaptureMode.UPLOAD
    assert widget.error == messages["camera_error"]
    assert selected == []


def test_backend_error_on_resolution_falls_back_to_upload(make_widget, messages):
    factory = FakeCameraFactory(set_error=cv2.error("unsupported property"))
    widget = make_widget(factory)

    widget.set_mode(CaptureMode.CAMERA)

    assert factory.devices[0][1].released
    assert not widget.camera_active
    assert widget.mode == CaptureMode.UPLOAD
    assert widget.error == messages["camera_error"]


def test_live_frame_reopens_a_released_stream(make_widget, frame):
    factory = FakeCameraFactory(frame=frame)
    widget = make_widget(factory)
    widget.set_mode(CaptureMode.CAMERA)

    # The page releases the device at the end of every run
    widget.close()
    assert factory.devices[0][1].released

    assert widget.live_frame() is not None
    assert len(factory.devices) == 2
    assert widget.camera_active

    widget.close()


@pytest.fixture
def browser_widget(selected, messages):
    return CaptureWidget(on_image_select=selected.append, messages=messages)


def test_browser_snapshot_is_reencoded_as_jpeg(browser_widget, selected):
    buffer = BytesIO()
    Image.new("RGBA", (64, 48), color=(10, 120, 30, 255)).save(buffer, format="PNG")

    browser_widget.set_mode(CaptureMode.CAMERA)
    assert browser_widget.mode == CaptureMode.CAMERA
    assert not browser_widget.camera_active
    assert browser_widget.live_frame() is None

    image = browser_widget.capture_snapshot(buffer.getvalue())

    assert selected == [image]
    assert image.mime_type == "image/jpeg"
    decoded = Image.open(BytesIO(base64.b64decode(image.base64_data)))
    assert decoded.format == "JPEG"
    assert decoded.size == (64, 48)


def test_browser_snapshot_outside_camera_mode_is_ignored(browser_widget, selected, jpeg_bytes):
    assert browser_widget.capture_snapshot(jpeg_bytes) is None

    browser_widget.set_mode(CaptureMode.CAMERA)
    browser_widget.disabled = True
    assert browser_widget.capture_snapshot(jpeg_bytes) is None
    assert selected == []


def test_unreadable_browser_snapshot_falls_back_to_upload(browser_widget, selected, messages):
    browser_widget.set_mode(CaptureMode.CAMERA)

    assert browser_widget.capture_snapshot(b"not an image") is None

    assert browser_widget.mode == CaptureMode.UPLOAD
    assert browser_widget.error == messages["camera_error"]
    assert selected == []
