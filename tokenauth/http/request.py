import json
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from starlette.datastructures import Headers, QueryParams
from starlette.requests import Request

from tokenauth.authentication.lookup import FieldChain, parse_field_path
from tokenauth.types.asgi import Scope

logger = logging.getLogger("tokenauth.http")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
BRACKET_KEY = re.compile(r"^[^\[\]]+(?:\[[^\[\]]+\])+$")


def _assign(target: dict[str, Any], chain: FieldChain, value: Any) -> None:
    *parents, leaf = chain
    for key in parents:
        child = target.setdefault(key, {})
        if not isinstance(child, dict):
            return
        target = child
    if isinstance(target.get(leaf), dict):
        return
    target[leaf] = value


def expand_bracket_keys(items: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """
    Build nested mappings from bracketed keys.

    ``[("user[name]", "bob"), ("page", "2")]`` -> ``{"user": {"name": "bob"}, "page": "2"}``

    Later values win. A plain value never replaces a nested mapping, and a
    nested key never descends into a plain value.
    """
    result: dict[str, Any] = {}
    for key, value in items:
        if BRACKET_KEY.match(key):
            _assign(result, parse_field_path(key), value)
        elif not isinstance(result.get(key), dict):
            result[key] = value
    return result


def parse_body(content_type: str | None, body: bytes) -> Any:
    """
    Decode a JSON or urlencoded form body.

    Empty, undecodable or unsupported bodies are treated as absent.
    """
    if not body:
        return None
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type == "application/json" or media_type.endswith("+json"):
        try:
            return json.loads(body)
        except ValueError:
            logger.debug("Ignoring malformed JSON request body")
            return None
    if media_type == FORM_CONTENT_TYPE:
        try:
            return expand_bracket_keys(QueryParams(body.decode("utf-8")).multi_items())
        except UnicodeDecodeError:
            logger.debug("Ignoring undecodable form request body")
            return None
    return None


@dataclass(frozen=True)
class RequestView:
    headers: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None
    query: Mapping[str, Any] | None = None

    def __post_init__(self):
        object.__setattr__(
            self, "headers", {k.lower(): v for k, v in (self.headers or {}).items()}
        )

    @classmethod
    def from_scope(cls, scope: Scope, body: bytes = b"") -> "RequestView":
        headers = Headers(scope=scope)
        query = QueryParams(scope.get("query_string", b""))
        return cls(
            headers=dict(headers.items()),
            body=parse_body(headers.get("content-type"), body),
            query=expand_bracket_keys(query.multi_items()),
        )

    @classmethod
    async def from_request(cls, request: Request) -> "RequestView":
        return cls.from_scope(request.scope, await request.body())
