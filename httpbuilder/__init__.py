"""httpbuilder - Middleware composition for HTTP handlers.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

httpbuilder wraps a terminal handler with an ordered chain of middleware:
- Builder from a handler function or a handler object
- Onion composition, first attached runs outermost
- Before/after adapters lifting plain handlers into middleware
- CORS and logging middleware built on the adapters
- CORS configuration from JSON, YAML and environment

Request Flow:
┌────────────────────────────────────────────────────────────────┐
│  Runtime ──▶ cors ──▶ logging ──▶ ... ──▶ Handler              │
│                                              │                  │
│  Runtime ◀── cors ◀── logging ◀── ... ◀──────┘                 │
└────────────────────────────────────────────────────────────────┘

Usage:
    from httpbuilder import cors, from_func, run_after

    def hello(w, r):
        w.write(b"hello")

    handler = (
        from_func(hello)
        .with_middleware(cors(lambda c: setattr(c, "allow_methods", ["GET"])))
        .with_middleware(run_after(lambda w, r: w.write(b"!")))
        .build()
    )

    # Hand `handler` to the HTTP runtime; it is called as handler(w, r)
"""

from httpbuilder.http import Headers, Request, ResponseRecorder, ResponseWriter
from httpbuilder.middleware import (
    WILDCARD,
    Builder,
    CorsConfig,
    CorsConfigCallback,
    Handler,
    HandlerFunc,
    HeaderList,
    LoggingConfig,
    Middleware,
    access_log,
    cors,
    from_func,
    from_handler,
    logging_middleware,
    run_after,
    run_before,
    to_middleware,
)
from httpbuilder.utils import load_cors_config

__version__ = "1.0.0"

__all__ = [
    # HTTP
    "Headers",
    "Request",
    "ResponseWriter",
    "ResponseRecorder",
    # Composition
    "Builder",
    "Handler",
    "HandlerFunc",
    "Middleware",
    "from_func",
    "from_handler",
    "run_before",
    "run_after",
    "to_middleware",
    # CORS
    "WILDCARD",
    "CorsConfig",
    "CorsConfigCallback",
    "HeaderList",
    "cors",
    "load_cors_config",
    # Logging
    "LoggingConfig",
    "logging_middleware",
    "access_log",
]
