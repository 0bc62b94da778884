"""Access logging middleware."""

from __future__ import annotations

import logging
import time
from typing import Callable

from fastapi import Request


class AccessLogMiddleware:
    """Log one structured line per HTTP response."""

    def __init__(self, app: Callable) -> None:
        self.app = app
        self.logger = logging.getLogger("scoresheet.access")

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        request = Request(scope, receive=receive)

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                self.logger.info(
                    "request_completed",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": message["status"],
                        "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                        "client_ip": request.client.host if request.client else None,
                    },
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)
