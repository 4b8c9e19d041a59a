"""Middleware Base - Handler composition.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Tuple

from httpbuilder.http.request import Request, ResponseWriter

logger = logging.getLogger(__name__)

HandlerFunc = Callable[[ResponseWriter, Request], None]
Middleware = Callable[[HandlerFunc], HandlerFunc]


class Handler(ABC):
    """Object form of a handler.

    Any object with a ``serve_http(w, r)`` method is accepted by
    :func:`from_handler`; subclassing is optional.
    """

    @abstractmethod
    def serve_http(self, w: ResponseWriter, r: Request) -> None:
        """Handle one request."""
        pass


class Builder:
    """Accumulates middleware around a terminal handler.

    The first middleware attached becomes the outermost layer:

    ┌────────────────────────────────────────────────────────────┐
    │                  Middleware Pipeline                        │
    │                                                             │
    │  Request ──▶ MW0 ──▶ MW1 ──▶ ... ──▶ Handler               │
    │                                          │                  │
    │  Response ◀── MW0 ◀── MW1 ◀── ... ◀──────┘                 │
    └────────────────────────────────────────────────────────────┘
    """

    def __init__(
        self,
        handler: HandlerFunc,
        middlewares: Optional[List[Middleware]] = None,
    ):
        self._handler = handler
        self._middlewares: List[Middleware] = list(middlewares or [])

    @property
    def handler(self) -> HandlerFunc:
        """Terminal handler."""
        return self._handler

    @property
    def middlewares(self) -> Tuple[Middleware, ...]:
        """Attached middleware in attachment order."""
        return tuple(self._middlewares)

    def with_middleware(self, middleware: Middleware) -> "Builder":
        """Attach middleware, returning the same builder."""
        self._middlewares.append(middleware)
        return self

    def use(self, *middlewares: Middleware) -> "Builder":
        """Attach several middleware in argument order."""
        for middleware in middlewares:
            self.with_middleware(middleware)
        return self

    def build(self) -> HandlerFunc:
        """Compose the final handler.

        ``[m0, m1, ..., mn]`` around ``h`` yields ``m0(m1(...mn(h)...))``.
        The builder is left untouched, so building twice gives two
        equivalent handlers.
        """
        handler = self._handler
        for middleware in reversed(self._middlewares):
            handler = middleware(handler)

        logger.debug(f"Built handler with {len(self._middlewares)} middleware")
        return handler

    def __len__(self) -> int:
        return len(self._middlewares)


def from_func(fn: HandlerFunc) -> Builder:
    """Start a builder from a handler function."""
    if not callable(fn):
        raise TypeError(f"handler must be callable, got {type(fn).__name__}")
    return Builder(fn)


def from_handler(handler: Any) -> Builder:
    """Start a builder from an object with a ``serve_http`` method."""
    serve_http = getattr(handler, "serve_http", None)
    if not callable(serve_http):
        raise TypeError(
            f"{type(handler).__name__} does not implement serve_http(w, r)"
        )
    return Builder(serve_http)


def run_before(side_effect: HandlerFunc) -> Middleware:
    """Lift a handler into middleware that runs it before the next handler."""

    def middleware(next_handler: HandlerFunc) -> HandlerFunc:
        def handler(w: ResponseWriter, r: Request) -> None:
            side_effect(w, r)
            next_handler(w, r)

        return handler

    return middleware


def run_after(side_effect: HandlerFunc) -> Middleware:
    """Lift a handler into middleware that runs it after the next handler."""

    def middleware(next_handler: HandlerFunc) -> HandlerFunc:
        def handler(w: ResponseWriter, r: Request) -> None:
            next_handler(w, r)
            side_effect(w, r)

        return handler

    return middleware


# Generic name for the default (before) adapter
to_middleware = run_before


__all__ = [
    "Handler",
    "HandlerFunc",
    "Middleware",
    "Builder",
    "from_func",
    "from_handler",
    "run_before",
    "run_after",
    "to_middleware",
]
