# plant_identifier/errors.py
"""Error taxonomy shared by the endpoint and the client."""


class IdentificationError(Exception):
    """Base error of the identify flow.

    ``message`` is safe to show to the user; the detail passed to the
    constructor as ``detail`` stays in the server log.
    """

    status_code = 500

    def __init__(self, message: str, detail: str = ""):
        super().__init__(detail or message)
        self.message = message
        self.detail = detail


class BadRequest(IdentificationError):
    """Missing or invalid client input."""

    status_code = 400


class UpstreamError(IdentificationError):
    """The model call failed, timed out or returned a schema-invalid document."""

    status_code = 500


class NetworkError(Exception):
    """Transport failure between the page and the API."""


class DeviceError(Exception):
    """Camera unavailable or access denied."""
