"""Request/Response - HTTP primitives handlers are written against.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class Headers:
    """Case-insensitive HTTP header map.

    Names keep the spelling of their first write. ``set`` replaces every
    value stored under a name, ``add`` appends another one.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._values: Dict[str, List[str]] = {}
        self._names: Dict[str, str] = {}
        if initial:
            for name, value in initial.items():
                self.set(name, value)

    def set(self, name: str, value: str) -> None:
        """Set header, replacing existing values."""
        key = name.lower()
        self._names.setdefault(key, name)
        self._values[key] = [value]

    def add(self, name: str, value: str) -> None:
        """Append a value to a header."""
        key = name.lower()
        self._names.setdefault(key, name)
        self._values.setdefault(key, []).append(value)

    def get(self, name: str, default: str = "") -> str:
        """Get first value of a header."""
        values = self._values.get(name.lower())
        if not values:
            return default
        return values[0]

    def get_all(self, name: str) -> List[str]:
        """Get all values of a header."""
        return list(self._values.get(name.lower(), []))

    def delete(self, name: str) -> None:
        """Remove a header."""
        key = name.lower()
        self._values.pop(key, None)
        self._names.pop(key, None)

    def items(self) -> List[Tuple[str, str]]:
        """List (name, value) pairs, one per stored value."""
        return [
            (self._names[key], value)
            for key, values in self._values.items()
            for value in values
        ]

    def to_dict(self) -> Dict[str, str]:
        """Convert to a plain dict of first values."""
        return {self._names[key]: values[0] for key, values in self._values.items()}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._values

    def __getitem__(self, name: str) -> str:
        if name not in self:
            raise KeyError(name)
        return self.get(name)

    def __setitem__(self, name: str, value: str) -> None:
        self.set(name, value)

    def __iter__(self) -> Iterator[str]:
        return iter([self._names[key] for key in self._values])

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Headers({self.to_dict()!r})"


@dataclass
class Request:
    """HTTP Request object.

    Represents an incoming HTTP request as handed over by the host runtime.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    remote_addr: str = ""
    protocol: str = "HTTP/1.1"
    timestamp: float = field(default_factory=time.time)

    # Per-request state shared between middleware
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)

    @property
    def content_type(self) -> str:
        """Get Content-Type header."""
        return self.headers.get("Content-Type")

    @property
    def is_json(self) -> bool:
        """Check if request is JSON."""
        return "application/json" in self.content_type

    def json(self) -> Any:
        """Parse body as JSON."""
        return json.loads(self.body.decode())

    def text(self) -> str:
        """Get body as text."""
        return self.body.decode()

    def get_header(self, name: str, default: str = "") -> str:
        """Get header value (case-insensitive)."""
        return self.headers.get(name, default)


class ResponseWriter(ABC):
    """Response stream a handler writes to.

    Headers must be set before the first ``write`` or ``write_header``
    for the runtime to send them.
    """

    @property
    @abstractmethod
    def headers(self) -> Headers:
        """Response header map."""

    @property
    @abstractmethod
    def status(self) -> int:
        """Status code written so far, 0 if none."""

    @property
    @abstractmethod
    def bytes_written(self) -> int:
        """Number of body bytes written so far."""

    @abstractmethod
    def write_header(self, status: int) -> None:
        """Send the status line and headers."""

    @abstractmethod
    def write(self, data: Union[bytes, str]) -> int:
        """Write body bytes, returning the number written."""


class ResponseRecorder(ResponseWriter):
    """In-memory ResponseWriter that records everything written to it."""

    STATUS_MESSAGES = {
        200: "OK",
        201: "Created",
        204: "No Content",
        301: "Moved Permanently",
        302: "Found",
        304: "Not Modified",
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        500: "Internal Server Error",
        502: "Bad Gateway",
        503: "Service Unavailable",
    }

    def __init__(self) -> None:
        self._headers = Headers()
        self._status = 0
        self._body = bytearray()

    @property
    def headers(self) -> Headers:
        return self._headers

    @property
    def status(self) -> int:
        return self._status

    @property
    def bytes_written(self) -> int:
        return len(self._body)

    @property
    def body(self) -> bytes:
        """Recorded body."""
        return bytes(self._body)

    @property
    def text(self) -> str:
        """Recorded body decoded as UTF-8."""
        return self._body.decode()

    def write_header(self, status: int) -> None:
        if self._status:
            logger.warning(
                f"Superfluous write_header({status}), status already {self._status}"
            )
            return
        self._status = status

    def write(self, data: Union[bytes, str]) -> int:
        if not self._status:
            self.write_header(200)
        if isinstance(data, str):
            data = data.encode()
        self._body.extend(data)
        return len(data)

    def to_bytes(self) -> bytes:
        """Render the recorded response as raw HTTP."""
        status = self._status or 200
        lines = [f"HTTP/1.1 {status} {self.STATUS_MESSAGES.get(status, 'Unknown')}"]

        if "Content-Length" not in self._headers:
            lines.append(f"Content-Length: {len(self._body)}")

        for key, value in self._headers.items():
            lines.append(f"{key}: {value}")

        lines.append("")
        header_bytes = "\r\n".join(lines).encode()

        return header_bytes + b"\r\n" + bytes(self._body)


__all__ = [
    "Headers",
    "Request",
    "ResponseWriter",
    "ResponseRecorder",
]
