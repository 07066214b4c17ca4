"""Request ID middleware.

Forwards a client-supplied X-Request-ID or generates one, echoes it on the
response and publishes it to the request context so workflow log lines carry it.
Client values are sanitized (length and character set) before they reach logs.
Raw ASGI, no BaseHTTPMiddleware.
"""

import re
import uuid
from typing import Callable

from docroute.shared.context import clear_request_context, set_request_id

REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$"
)


def sanitize_request_id(raw: str | None) -> str:
    """Return raw when it is a safe id; otherwise a new UUID4 string."""
    value = (raw or "").strip()
    if REQUEST_ID_ALLOWED_PATTERN.match(value):
        return value
    return str(uuid.uuid4())


class RequestIDMiddleware:
    """Add or forward the request id header on each HTTP request and response."""

    def __init__(self, app: Callable, header_name: str = "X-Request-ID") -> None:
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode()

    def _read_header(self, scope: dict) -> str | None:
        for key, value in scope.get("headers", []):
            if key.lower() == self._header_key:
                return value.decode("utf-8", errors="replace")
        return None

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        request_id = sanitize_request_id(self._read_header(scope))
        scope.setdefault("state", {})["request_id"] = request_id
        set_request_id(request_id)

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((self.header_name.encode(), request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            clear_request_context()
