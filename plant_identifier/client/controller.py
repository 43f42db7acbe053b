# plant_identifier/client/controller.py
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

import httpx
from pydantic import ValidationError

from plant_identifier.client.capture import CapturedImage
from plant_identifier.errors import NetworkError
from plant_identifier.i18n import get_messages
from plant_identifier.models.plant import IdentifyResponse, Plant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    preview: str


@dataclass(frozen=True)
class Result:
    plant: Plant
    preview: str


@dataclass(frozen=True)
class Error:
    message: str


PageState = Union[Idle, Loading, Result, Error]


class IdentifyClient:
    """Thin HTTP client for POST /api/identify.

    Each request opens and closes its own connection, so nothing is left
    open when a page session goes away.
    """

    def __init__(self, base_url: str, timeout: float = 90.0, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    def identify(self, image: CapturedImage) -> httpx.Response:
        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as http:
                return http.post(
                    "/api/identify",
                    json={"image": image.base64_data, "mimeType": image.mime_type},
                )
        except httpx.HTTPError as e:
            raise NetworkError(str(e)) from e


class PageController:
    """Drives idle -> loading -> result | error -> idle for one page."""

    def __init__(self, client: IdentifyClient, messages: Optional[Dict[str, str]] = None):
        self.client = client
        self.messages = messages or get_messages()
        self.state: PageState = Idle()
        self._listeners: List[Callable[[PageState], None]] = []
        # Bumped on every begin/reset so a late completion can be discarded
        self._generation = 0

    def subscribe(self, listener: Callable[[PageState], None]) -> None:
        self._listeners.append(listener)

    def _set_state(self, state: PageState) -> None:
        self.state = state
        for listener in self._listeners:
            listener(state)

    @property
    def busy(self) -> bool:
        return isinstance(self.state, Loading)

    def begin(self, image: CapturedImage) -> Optional[int]:
        """Enter loading with the preview shown right away. Ignored while busy."""
        if self.busy:
            return None
        self._generation += 1
        self._set_state(Loading(preview=image.preview))
        return self._generation

    def complete(self, ticket: int, response: httpx.Response, preview: str) -> None:
        if ticket != self._generation or not self.busy:
            logger.debug("Discarding stale identification response")
            return
        self._set_state(self._state_from_response(response, preview))

    def fail(self, ticket: int, message: str) -> None:
        if ticket != self._generation or not self.busy:
            return
        self._set_state(Error(message=message))

    def submit(self, image: CapturedImage) -> PageState:
        """Send ``image`` to the API and land in result or error."""
        ticket = self.begin(image)
        if ticket is None:
            return self.state
        try:
            response = self.client.identify(image)
        except NetworkError as e:
            logger.warning(f"Identification request failed: {e}")
            self.fail(ticket, self.messages["error_connection"])
            return self.state
        self.complete(ticket, response, image.preview)
        return self.state

    def reset(self) -> None:
        """Back to idle, dropping the preview, the result and any pending request."""
        self._generation += 1
        self._set_state(Idle())

    def _state_from_response(self, response: httpx.Response, preview: str) -> PageState:
        if response.status_code != 200:
            try:
                data = response.json()
            except ValueError:
                data = None
            message = data.get("error") if isinstance(data, dict) else None
            return Error(message=message or self.messages["error_unknown"])

        try:
            body = IdentifyResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(f"Unexpected identification response: {e}")
            return Error(message=self.messages["error_unknown"])
        return Result(plant=body.plant, preview=preview)
