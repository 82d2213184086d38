"""REST response object — mutable, chainable holder for an API response.

Handlers configure a RestResponse through chained setters; the renderer
reads it once through :meth:`RestResponse.get_memento` and discards it.

Usage:
    response = RestResponse().set_data({"id": 1}).set_status(201, "Created")
    response.set_header("Location", "/things/1").finish()
"""

from types import MappingProxyType
from typing import Any, Mapping

ERROR_MESSAGE_HEADER = "X-REST-ERROR-MESSAGE"
ERROR_DETAIL_HEADER = "X-REST-ERROR-DETAIL"


class RestResponse:
    """Response under construction for the current request."""

    def __init__(self) -> None:
        self.data: Any = None
        self.mime_type: str = "application/json"
        self.renderer: str = "json"
        self.status_code: int = 200
        self.status_text: str = ""
        self.headers: dict[str, str] = {}
        self.finished: bool = False

    def set_status(self, code: int | None = None, text: str | None = None) -> "RestResponse":
        """Update whichever of status code / status text is supplied."""
        if code is not None:
            self.status_code = code
        if text is not None:
            self.status_text = text
        return self

    def set_headers(self, headers: Mapping[str, str]) -> "RestResponse":
        """Merge headers into the existing ones; later values win."""
        self.headers.update(headers)
        return self

    def set_header(self, name: str, value: str) -> "RestResponse":
        self.headers[name] = value
        return self

    def set_data(self, data: Any) -> "RestResponse":
        self.data = data
        return self

    def no_data(self) -> "RestResponse":
        """Clear the payload and switch to an empty plain-text body."""
        self.data = None
        self.renderer = "plain"
        self.mime_type = "text/plain"
        return self

    def set_mime_type(self, mime_type: str) -> "RestResponse":
        self.mime_type = mime_type
        return self

    def set_renderer(self, renderer: str) -> "RestResponse":
        self.renderer = renderer
        return self

    def set_error(
        self,
        error_type: str = "Unspecified error",
        error_code: int = 500,
        message: str = "An unhandled exception occurred within the REST API",
        detail: str = "",
    ) -> "RestResponse":
        """Turn the response into a bodyless error response.

        The message and detail travel as ``X-REST-ERROR-*`` headers and are
        only set when non-empty.
        """
        self.no_data()
        self.set_status(error_code, error_type)
        if message:
            self.set_header(ERROR_MESSAGE_HEADER, message)
        if detail:
            self.set_header(ERROR_DETAIL_HEADER, detail)
        return self

    def finish(self) -> "RestResponse":
        """Mark the response as final — further processing should stop."""
        self.finished = True
        return self

    def is_finished(self) -> bool:
        return self.finished

    def get_memento(self) -> Mapping[str, Any]:
        """Read-only snapshot of the response state."""
        return MappingProxyType({
            "data": self.data,
            "mime_type": self.mime_type,
            "renderer": self.renderer,
            "status_code": self.status_code,
            "status_text": self.status_text,
            "headers": MappingProxyType(dict(self.headers)),
            "finished": self.finished,
        })

    def __repr__(self) -> str:
        return (
            f"<RestResponse(status={self.status_code}, renderer='{self.renderer}', "
            f"finished={self.finished})>"
        )
