"""Logging Middleware - Request/response logging.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from httpbuilder.http.request import Request, ResponseWriter
from httpbuilder.middleware.base import HandlerFunc, Middleware, run_after

logger = logging.getLogger(__name__)


@dataclass
class LoggingConfig:
    """Logging middleware configuration."""

    log_headers: bool = False
    log_query: bool = True
    skip_paths: List[str] = field(default_factory=list)


def logging_middleware(config: Optional[LoggingConfig] = None) -> Middleware:
    """Build middleware logging each request and its response status."""
    config = config or LoggingConfig()

    def middleware(next_handler: HandlerFunc) -> HandlerFunc:
        def handler(w: ResponseWriter, r: Request) -> None:
            if r.path in config.skip_paths:
                next_handler(w, r)
                return

            request_id = str(uuid.uuid4())[:8]
            r.context["request_id"] = request_id
            start_time = time.time()

            log_parts = [f"[{request_id}] --> {r.method} {r.path}"]

            if config.log_query and r.query:
                log_parts.append(f"query={r.query}")

            if config.log_headers:
                log_parts.append(f"headers={r.headers.to_dict()}")

            logger.info(" ".join(log_parts))

            next_handler(w, r)

            duration_ms = (time.time() - start_time) * 1000
            logger.info(f"[{request_id}] <-- {w.status} ({duration_ms:.2f}ms)")

        return handler

    return middleware


def access_log(format_string: Optional[str] = None) -> Middleware:
    """Build middleware writing an Apache/Nginx style access log line."""
    # Combined log format by default
    log_format = format_string or (
        '{remote_addr} - {remote_user} [{time}] '
        '"{method} {path} {protocol}" {status} {body_bytes} '
        '"{referer}" "{user_agent}"'
    )

    def log_request(w: ResponseWriter, r: Request) -> None:
        log_data = {
            "remote_addr": r.remote_addr or "-",
            "remote_user": "-",
            "time": time.strftime("%d/%b/%Y:%H:%M:%S %z"),
            "method": r.method,
            "path": r.path,
            "protocol": r.protocol,
            "status": w.status,
            "body_bytes": w.bytes_written,
            "referer": r.headers.get("Referer", "-"),
            "user_agent": r.headers.get("User-Agent", "-"),
        }

        logger.info(log_format.format(**log_data))

    return run_after(log_request)


__all__ = [
    "LoggingConfig",
    "logging_middleware",
    "access_log",
]
