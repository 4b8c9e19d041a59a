"""HTTP module - Request and response primitives."""

from httpbuilder.http.request import Headers, Request, ResponseRecorder, ResponseWriter

__all__ = [
    "Headers",
    "Request",
    "ResponseWriter",
    "ResponseRecorder",
]
