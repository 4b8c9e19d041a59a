"""Middleware module - Handler composition and built-in middleware."""

from httpbuilder.middleware.base import (
    Builder,
    Handler,
    HandlerFunc,
    Middleware,
    from_func,
    from_handler,
    run_after,
    run_before,
    to_middleware,
)
from httpbuilder.middleware.cors import (
    WILDCARD,
    CorsConfig,
    CorsConfigCallback,
    HeaderList,
    cors,
)
from httpbuilder.middleware.logging import LoggingConfig, access_log, logging_middleware

__all__ = [
    "Builder",
    "Handler",
    "HandlerFunc",
    "Middleware",
    "from_func",
    "from_handler",
    "run_before",
    "run_after",
    "to_middleware",
    "WILDCARD",
    "CorsConfig",
    "CorsConfigCallback",
    "HeaderList",
    "cors",
    "LoggingConfig",
    "logging_middleware",
    "access_log",
]
