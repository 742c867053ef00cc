"""Request correlation id.

Every HTTP request gets an id: the client's X-Request-ID when it is a short
token of letters, digits, ``-`` or ``_``, otherwise a fresh uuid4. The id is
bound to the request context for logs and audit metadata and echoed on the
response.
"""

import re
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from tenantguard.shared.context import set_request_id

_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


def resolve_request_id(raw: str | None) -> str:
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


class RequestIDMiddleware:
    """Pure ASGI middleware; streaming responses pass through untouched."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode("latin-1")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        raw = next(
            (
                value.decode("latin-1")
                for key, value in scope.get("headers", [])
                if key.lower() == self._header_key
            ),
            None,
        )
        request_id = resolve_request_id(raw)
        scope.setdefault("state", {})["request_id"] = request_id
        set_request_id(request_id)

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (self._header_key, request_id.encode("latin-1")),
                ]
            await send(message)

        await self.app(scope, receive, send_with_request_id)
