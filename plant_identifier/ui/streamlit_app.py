# plant_identifier/ui/streamlit_app.py
# Run with: streamlit run plant_identifier/ui/streamlit_app.py
import base64

import streamlit as st

from plant_identifier.client.capture import CameraStream, CaptureMode, CaptureWidget
from plant_identifier.client.controller import Error, Idle, IdentifyClient, Loading, PageController, Result
from plant_identifier.client.renderer import PlantView, TagList, Tone, render_plant
from plant_identifier.config import get_settings
from plant_identifier.i18n import get_messages

settings = get_settings()
messages = get_messages(settings.LOCALE)

TONE_COLOR = {
    Tone.POSITIVE: "green",
    Tone.CAUTION: "orange",
    Tone.WARNING: "orange",
    Tone.DANGER: "red",
    Tone.CRITICAL: "red",
}

st.set_page_config(page_title=messages["page_title"], page_icon="🌺", layout="centered")


MODE_KEY = "capture_mode"


def _select_image(image):
    st.session_state.pending = image


def _init_session():
    if "controller" not in st.session_state:
        client = IdentifyClient(settings.API_BASE_URL, timeout=settings.CLIENT_TIMEOUT_SECONDS)
        st.session_state.controller = PageController(client, messages)
    if "widget" not in st.session_state:
        camera = None
        if settings.CAMERA_SOURCE == "local":
            camera = CameraStream(settings.CAMERA_INDEX, settings.CAMERA_WIDTH, settings.CAMERA_HEIGHT)
        st.session_state.widget = CaptureWidget(
            on_image_select=_select_image,
            camera=camera,
            messages=messages,
            jpeg_quality=settings.JPEG_QUALITY,
        )
    if "pending" not in st.session_state:
        st.session_state.pending = None
    if "uploader_key" not in st.session_state:
        st.session_state.uploader_key = 0


def _preview_bytes(preview: str) -> bytes:
    return base64.b64decode(preview.split(",", 1)[1])


def _badge(badge) -> str:
    return f":{TONE_COLOR[badge.tone]}[**{badge.text}**]"


def _draw_tags(tags: TagList):
    st.caption(tags.label.upper())
    if tags.is_empty:
        st.markdown(f"*{tags.empty_text}*")
    else:
        st.markdown(" ".join(f"`{item}`" for item in tags.items))


def _draw_plant(view: PlantView):
    if view.placeholder is not None:
        with st.container(border=True):
            st.markdown(f"### 🔍 {view.placeholder.title}")
            st.caption(view.placeholder.hint)
        return

    header = view.header
    with st.container(border=True):
        left, right = st.columns([3, 1])
        left.subheader(header.common_name)
        left.markdown(f"*{header.scientific_name}*")
        left.caption(header.family)
        right.markdown(_badge(header.confidence))
        st.write(header.description)

    toxicity = view.toxicity
    with st.container(border=True):
        st.markdown(f"#### ⚠️ {toxicity.title}")
        st.markdown(f"{_badge(toxicity.toxic)} {_badge(toxicity.severity)}")
        for tags in toxicity.details:
            _draw_tags(tags)

    edibility = view.edibility
    with st.container(border=True):
        st.markdown(f"#### 🍽️ {edibility.title}")
        st.markdown(_badge(edibility.edible))
        if edibility.edible_parts is not None:
            _draw_tags(edibility.edible_parts)
        if edibility.preparation:
            st.caption(edibility.preparation_label.upper())
            st.write(edibility.preparation)
        if edibility.warnings:
            st.caption(edibility.warnings_label.upper())
            for warning in edibility.warnings:
                st.markdown(f":orange[• {warning}]")


def _reset():
    st.session_state.controller.reset()
    st.session_state.pending = None
    st.session_state.uploader_key += 1


def _change_mode():
    widget = st.session_state.widget
    widget.set_mode(st.session_state[MODE_KEY])
    # A camera that cannot start leaves the widget in upload mode
    st.session_state[MODE_KEY] = widget.mode


def _draw_capture(widget: CaptureWidget):
    labels = {CaptureMode.UPLOAD: messages["mode_upload"], CaptureMode.CAMERA: messages["mode_camera"]}
    # Follow fallbacks that happened after the selector was last drawn
    if st.session_state.get(MODE_KEY) != widget.mode:
        st.session_state[MODE_KEY] = widget.mode
    st.radio(
        "mode",
        options=list(labels),
        format_func=labels.get,
        key=MODE_KEY,
        on_change=_change_mode,
        horizontal=True,
        label_visibility="collapsed",
    )

    if widget.error:
        st.warning(widget.error)

    if widget.mode == CaptureMode.CAMERA:
        if widget.camera is None:
            snapshot = st.camera_input(
                messages["capture_button"],
                disabled=widget.disabled,
                key=f"camera-{st.session_state.uploader_key}",
            )
            if snapshot is not None:
                widget.capture_snapshot(snapshot.getvalue())
        else:
            frame = widget.live_frame()
            if frame is not None:
                st.image(frame, width="stretch")
                if st.button(messages["capture_button"], disabled=widget.disabled, width="stretch"):
                    widget.capture()
        if widget.mode != CaptureMode.CAMERA:
            st.rerun()
        return

    uploaded = st.file_uploader(
        messages["upload_prompt"],
        type=["jpg", "jpeg", "png", "gif", "webp"],
        help=messages["upload_hint"],
        disabled=widget.disabled,
        key=f"uploader-{st.session_state.uploader_key}",
    )
    if uploaded is not None:
        widget.select_file(uploaded.name, uploaded.getvalue(), uploaded.type)


_init_session()
controller: PageController = st.session_state.controller
widget: CaptureWidget = st.session_state.widget

st.markdown("<div style='text-align:center;font-size:3rem'>🌺</div>", unsafe_allow_html=True)
st.title(messages["page_title"])
st.caption(messages["page_subtitle"])

state = controller.state
widget.disabled = isinstance(state, Loading)

if isinstance(state, Idle):
    _draw_capture(widget)
    # The live frame reopens the local camera on the next run
    widget.close()
    pending = st.session_state.pending
    if pending is not None:
        st.session_state.pending = None
        st.image(_preview_bytes(pending.preview), caption=messages["selected_image"], width="stretch")
        with st.spinner(messages["analyzing"]):
            controller.submit(pending)
        st.rerun()
else:
    # Camera stays off outside the capture step
    widget.close()

if isinstance(state, Error):
    with st.container(border=True):
        st.error(f"❌ {state.message}")
        st.button(messages["try_again"], on_click=_reset)

elif isinstance(state, Result):
    st.image(_preview_bytes(state.preview), caption=messages["identified_image"], width="stretch")
    _draw_plant(render_plant(state.plant, messages))
    st.button(messages["analyze_another"], on_click=_reset, width="stretch")
