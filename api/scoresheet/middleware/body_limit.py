"""Request body size limit for JSON edits."""

from __future__ import annotations

from typing import Callable

from starlette.responses import JSONResponse

from scoresheet.config import settings

# Multipart uploads are bounded separately by MAX_UPLOAD_BYTES.
LIMITED_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _declared_length(scope: dict) -> int | None:
    for name, value in scope.get("headers", []):
        if name == b"content-length":
            text = value.decode("latin-1").strip()
            return int(text) if text.isdigit() else None
    return None


def _is_multipart(scope: dict) -> bool:
    for name, value in scope.get("headers", []):
        if name == b"content-type":
            return value.lower().startswith(b"multipart/")
    return False


class BodyLimitMiddleware:
    """Reject bodies over MAX_BODY_BYTES with 413 before any route parses them.

    The declared Content-Length is checked first. Bodies without one
    (chunked transfer) are buffered up to the limit and replayed to the app.
    """

    def __init__(self, app: Callable) -> None:
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope["method"] not in LIMITED_METHODS or _is_multipart(scope):
            await self.app(scope, receive, send)
            return

        limit = settings.max_body_bytes
        declared = _declared_length(scope)
        if declared is not None:
            if declared > limit:
                await self._reject(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        messages: list[dict] = []
        received = 0
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > limit:
                await self._reject(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        async def replay() -> dict:
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: dict, receive: Callable, send: Callable) -> None:
        response = JSONResponse({"error": "Request body too large"}, status_code=413)
        await response(scope, receive, send)
