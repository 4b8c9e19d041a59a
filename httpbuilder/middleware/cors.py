"""CORS Middleware - Cross-Origin Resource Sharing.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Mapping, Optional

from httpbuilder.http.request import Request, ResponseWriter
from httpbuilder.middleware.base import Middleware, run_before

logger = logging.getLogger(__name__)

WILDCARD = ("*",)

# Response header -> CorsConfig attribute
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "allow_origins",
    "Access-Control-Allow-Headers": "allow_headers",
    "Access-Control-Allow-Methods": "allow_methods",
    "Access-Control-Allow-Credentials": "allow_credentials",
}


class HeaderList(list):
    """List of values rendered as one comma-separated header."""

    def to_header(self) -> str:
        """Join values with ``", "``; empty renders as ``""``."""
        return ", ".join(self)


def _wildcard() -> HeaderList:
    return HeaderList(WILDCARD)


def _to_header_list(name: str, value: Any) -> HeaderList:
    if value is None:
        return HeaderList()
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise TypeError(f"{name} must be a list of strings, got {type(value).__name__}")

    items = list(value)
    for item in items:
        if not isinstance(item, str):
            raise TypeError(
                f"{name} entries must be strings, got {type(item).__name__}"
            )
    return HeaderList(items)


@dataclass
class CorsConfig:
    """CORS configuration.

    Every field defaults to its own copy of the wildcard list.
    """

    allow_origins: HeaderList = field(default_factory=_wildcard)
    allow_headers: HeaderList = field(default_factory=_wildcard)
    allow_methods: HeaderList = field(default_factory=_wildcard)
    allow_credentials: HeaderList = field(default_factory=_wildcard)

    # Document key -> attribute
    FIELD_NAMES: ClassVar[Dict[str, str]] = {
        "allowOrigins": "allow_origins",
        "allowHeaders": "allow_headers",
        "allowMethods": "allow_methods",
        "allowCredentials": "allow_credentials",
    }

    def update(self, data: Mapping[str, Any]) -> "CorsConfig":
        """Decode a document mapping into this config.

        Keys absent from ``data`` keep their current value, unknown keys are
        ignored and ``None`` clears a field.

        Raises:
            TypeError: if ``data`` is not a mapping or a value is not a
                list of strings
        """
        if not isinstance(data, Mapping):
            raise TypeError(
                f"CORS config document must be a mapping, got {type(data).__name__}"
            )

        for key, value in data.items():
            attr = self.FIELD_NAMES.get(key)
            if attr is None:
                logger.debug(f"Ignoring unknown CORS config key: {key}")
                continue
            setattr(self, attr, _to_header_list(key, value))

        return self

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to document form."""
        return {key: list(getattr(self, attr)) for key, attr in self.FIELD_NAMES.items()}


CorsConfigCallback = Callable[[CorsConfig], None]


def cors(config_callback: Optional[CorsConfigCallback] = None) -> Middleware:
    """Build middleware setting the CORS response headers.

    Args:
        config_callback: Optional callable receiving the default config to
            override any of its fields

    Returns:
        Middleware that sets the four Access-Control-Allow-* headers before
        calling the next handler
    """
    config = CorsConfig()
    if config_callback is not None:
        config_callback(config)

    headers = {
        name: _to_header_list(attr, getattr(config, attr)).to_header()
        for name, attr in CORS_HEADERS.items()
    }
    logger.debug(f"CORS headers: {headers}")

    def set_headers(w: ResponseWriter, r: Request) -> None:
        for name, value in headers.items():
            w.headers.set(name, value)

    return run_before(set_headers)


__all__ = [
    "WILDCARD",
    "CORS_HEADERS",
    "HeaderList",
    "CorsConfig",
    "CorsConfigCallback",
    "cors",
]
