"""Render a RestResponse memento into an HTTP response."""

import json
from collections.abc import Callable
from typing import Any, Mapping
from urllib.parse import quote

from fastapi.encoders import jsonable_encoder
from starlette.responses import Response

from app.presentation.rest.response import RestResponse

STATUS_TEXT_HEADER = "X-REST-STATUS-TEXT"


class UnknownRendererError(ValueError):
    """Raised when a response names a renderer that is not registered."""

    def __init__(self, renderer: str):
        self.renderer = renderer
        super().__init__(f"Unknown REST renderer '{renderer}'")


def _render_json(data: Any) -> bytes:
    return json.dumps(
        jsonable_encoder(data),
        ensure_ascii=False,
        allow_nan=False,
        separators=(",", ":"),
    ).encode("utf-8")


def _render_plain(data: Any) -> bytes:
    if data is None:
        return b""
    return str(data).encode("utf-8")


_RENDERERS: dict[str, Callable[[Any], bytes]] = {
    "json": _render_json,
    "plain": _render_plain,
}


def _header_value(value: Any) -> str:
    """Make a header value safe for HTTP/1.1 (latin-1, single line).

    Control characters (CR and LF included) become spaces and characters
    outside latin-1 are percent-encoded as UTF-8.
    """
    return "".join(_header_char(ch) for ch in str(value))


def _header_char(ch: str) -> str:
    code = ord(ch)
    if code < 32 and ch != "\t" or code == 127:
        return " "
    if code > 255:
        return quote(ch, safe="")
    return ch


def _allows_body(status_code: int) -> bool:
    return status_code >= 200 and status_code not in (204, 304)


def render_response(memento: Mapping[str, Any]) -> Response:
    """Build a Starlette response from a RestResponse memento.

    ASGI carries no reason phrase, so a non-empty status text is sent as the
    ``X-REST-STATUS-TEXT`` header.
    """
    renderer = memento["renderer"]
    render = _RENDERERS.get(renderer)
    if render is None:
        raise UnknownRendererError(renderer)

    status_code = memento["status_code"]
    body = render(memento["data"]) if _allows_body(status_code) else b""

    headers = {name: _header_value(value) for name, value in memento["headers"].items()}
    if memento["status_text"]:
        headers.setdefault(STATUS_TEXT_HEADER, _header_value(memento["status_text"]))

    return Response(
        content=body,
        status_code=status_code,
        headers=headers,
        media_type=memento["mime_type"],
    )


def to_http_response(response: RestResponse) -> Response:
    return render_response(response.get_memento())
