import json
import logging
from typing import Any

from tokenauth.authentication.base import dispatch
from tokenauth.authentication.manager import AuthManager
from tokenauth.http.request import RequestView
from tokenauth.http.utils import get_failure_response
from tokenauth.types.asgi import ASGIApp, ASGIReceive, ASGISend, Message, Scope

logger = logging.getLogger("tokenauth.http")


async def buffer_body(receive: ASGIReceive) -> tuple[bytes, ASGIReceive]:
    """
    Drain the request body and return it with a receive callable that
    replays the consumed messages to the downstream app.
    """
    messages: list[Message] = []
    chunks: list[bytes] = []
    while True:
        message = await receive()
        messages.append(message)
        if message["type"] != "http.request":
            break
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break

    async def replay() -> Message:
        if messages:
            return messages.pop(0)
        return await receive()

    return b"".join(chunks), replay


async def send_json(send: ASGISend, status: int, payload: dict[str, Any]):
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": [
                [b"content-type", b"application/json"],
            ],
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": json.dumps(payload).encode("utf-8"),
        }
    )


class ASGIAuthenticationMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        auth_manager: AuthManager,
        *,
        exclude_paths=None,
        bad_request_message: str | None = None,
    ):
        self.app = app
        self.auth_manager = auth_manager
        self.exclude_paths = set(exclude_paths or [])
        self.bad_request_message = bad_request_message

    async def __call__(self, scope: Scope, receive: ASGIReceive, send: ASGISend):
        if scope["type"] != "http" or scope.get("path") in self.exclude_paths:
            return await self.app(scope, receive, send)

        body, receive = await buffer_body(receive)
        request = RequestView.from_scope(scope, body)
        outcome = await self.auth_manager.authenticate(
            request, bad_request_message=self.bad_request_message
        )

        async def success(user, info):
            scope["auth_user"] = user
            scope["auth_info"] = info
            await self.app(scope, receive, send)

        async def fail(info):
            status, detail = get_failure_response(info)
            await send_json(send, status, {"detail": detail})

        async def error(err):
            logger.error(f"Authentication error: {err!r}")
            await send_json(send, 500, {"detail": "Internal Server Error"})

        await dispatch(outcome, success=success, fail=fail, error=error)
