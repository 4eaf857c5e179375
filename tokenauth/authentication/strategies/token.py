import asyncio
import inspect
import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from tokenauth.authentication.base import (
    Authenticated,
    BaseAuthStrategy,
    Errored,
    HTTPRequest,
    Outcome,
    Rejected,
)
from tokenauth.authentication.errors import (
    BadRequestError,
    ConfigurationError,
    VerifierTimeoutError,
)
from tokenauth.authentication.lookup import FieldChain, lookup
from tokenauth.authentication.options import TokenStrategyOptions
from tokenauth.authentication.registry import register_authentication_strategy

logger = logging.getLogger("tokenauth.authentication")

MISSING_CREDENTIALS = "Missing credentials"

type Verifier = Callable[..., Any]


def _build_options(
    options: TokenStrategyOptions | Mapping[str, Any] | None,
) -> TokenStrategyOptions:
    if isinstance(options, TokenStrategyOptions):
        return options
    try:
        return TokenStrategyOptions.model_validate(dict(options or {}))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid token strategy options: {e}") from e


def _header_name(key: Any) -> str | None:
    if isinstance(key, bytes | bytearray):
        return bytes(key).decode("latin-1").lower()
    if isinstance(key, str):
        return key.lower()
    return None


def _header(headers: Mapping[str, Any] | None, name: str) -> Any:
    if not headers:
        return None
    value = headers.get(name)
    if value is None:
        value = next((v for k, v in headers.items() if _header_name(k) == name), None)
    return value


class VerifyCallback:
    """
    Single-assignment ``done(err, user, info)`` handed to the verifier.

    The first call settles the outcome; later calls are logged and ignored.
    It may be called from any thread: calls made outside the event loop
    thread are handed over to the loop.
    """

    def __init__(self, future: asyncio.Future, loop: asyncio.AbstractEventLoop):
        self.future = future
        self.loop = loop
        self.loop_thread_id = threading.get_ident()

    def __call__(self, err: Any = None, user: Any = None, info: Any = None) -> None:
        if threading.get_ident() == self.loop_thread_id:
            self._settle(err, user, info)
            return
        try:
            self.loop.call_soon_threadsafe(self._settle, err, user, info)
        except RuntimeError:
            logger.warning("Verify callback invoked after the event loop was closed, ignoring")

    def _settle(self, err: Any, user: Any, info: Any) -> None:
        if self.future.cancelled():
            logger.warning("Verify callback invoked after the request timed out, ignoring")
            return
        if self.future.done():
            logger.warning("Verify callback invoked more than once, ignoring")
            return
        if err:
            self.future.set_result(Errored(err))
        elif not user:
            self.future.set_result(Rejected(info))
        else:
            self.future.set_result(Authenticated(user, info))



@register_authentication_strategy("token")
class TokenStrategy(BaseAuthStrategy):
    """
    Authenticates requests from a username and token found in the request
    headers, body or query string.

    The application supplies ``verify(username, token, done)``, or
    ``verify(request, username, token, done)`` when
    ``pass_request_to_verifier`` is set. It must call
    ``done(err, user, info)`` exactly once, with ``user`` falsy when the
    credentials are not valid and ``err`` set on unexpected failures.
    ``verify`` may be a plain function or a coroutine function.

    Example::

        def verify(username, token, done):
            user = users.get(username)
            done(None, user if user and user.token == token else None)

        strategy = TokenStrategy(verify)
    """

    def __init__(
        self,
        options: TokenStrategyOptions | Mapping[str, Any] | Verifier | None = None,
        verify: Verifier | None = None,
    ):
        if callable(options) and verify is None:
            verify, options = options, None
        if not callable(verify):
            raise ConfigurationError("token authentication strategy requires a verify function")
        super().__init__(_build_options(options))
        self.verify = verify

    @property
    def options(self) -> TokenStrategyOptions:
        return self.config

    def _resolve(self, request: HTTPRequest, header: str, field: FieldChain, query: FieldChain):
        return (
            _header(getattr(request, "headers", None), header)
            or lookup(getattr(request, "body", None), field)
            or lookup(getattr(request, "query", None), query)
        )

    def extract_credentials(self, request: HTTPRequest) -> tuple[Any, Any]:
        username = self._resolve(
            request,
            self.options.username_header,
            self.options.username_field_chain,
            self.options.username_query_chain,
        )
        token = self._resolve(
            request,
            self.options.token_header,
            self.options.token_field_chain,
            self.options.token_query_chain,
        )
        return username, token

    async def authenticate(
        self, request: HTTPRequest, *, bad_request_message: str | None = None
    ) -> Outcome:
        username, token = self.extract_credentials(request)
        if not username or not token:
            logger.debug("No credentials found in request")
            return Rejected(BadRequestError(bad_request_message or MISSING_CREDENTIALS))

        loop = asyncio.get_running_loop()
        future = loop.create_future()
        done = VerifyCallback(future, loop)
        if self.options.pass_request_to_verifier:
            args = (request, username, token, done)
        else:
            args = (username, token, done)

        timeout = self.options.verify_timeout
        try:
            async with asyncio.timeout(timeout):
                try:
                    result = self.verify(*args)
                    if inspect.isawaitable(result):
                        await result
                except Exception as e:
                    logger.exception("Verify function raised for user %s", username)
                    if not future.done():
                        return Errored(e)
                return await future
        except TimeoutError:
            logger.error("Verify function did not complete within %s seconds", timeout)
            return Errored(
                VerifierTimeoutError(f"verify did not complete within {timeout} seconds")
            )
