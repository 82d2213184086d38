from .response import RestResponse
from .renderer import UnknownRendererError, render_response, to_http_response
from .errors import register_exception_handlers

__all__ = [
    "RestResponse",
    "UnknownRendererError",
    "render_response",
    "to_http_response",
    "register_exception_handlers",
]
