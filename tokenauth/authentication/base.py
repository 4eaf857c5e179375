from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol


class HTTPRequest(Protocol):
    headers: Mapping[str, Any]
    body: Any
    query: Mapping[str, Any] | None


@dataclass(frozen=True)
class Authenticated:
    user: Any
    info: Any = None


@dataclass(frozen=True)
class Rejected:
    info: Any = None


@dataclass(frozen=True)
class Errored:
    error: Any


type Outcome = Authenticated | Rejected | Errored


def dispatch(
    outcome: Outcome,
    *,
    success: Callable[[Any, Any], Any],
    fail: Callable[[Any], Any],
    error: Callable[[Any], Any],
) -> Any:
    """
    Route an outcome to exactly one of the host completion hooks.

    :param outcome: the result of a strategy ``authenticate`` call.
    :param success: called with ``(user, info)`` for an authenticated request.
    :param fail: called with ``info`` for a rejected request.
    :param error: called with the error for an errored request.
    :return: whatever the selected hook returns.
    """
    match outcome:
        case Authenticated(user=user, info=info):
            return success(user, info)
        case Rejected(info=info):
            return fail(info)
        case Errored(error=err):
            return error(err)
    raise TypeError(f"Unknown authentication outcome: {outcome!r}")


class BaseAuthStrategy(ABC):
    """
    Framework-agnostic request authentication strategy.

    """

    name: str

    def __init__(self, config: Any):
        self.config = config

    @abstractmethod
    async def authenticate(
        self, request: HTTPRequest, *, bad_request_message: str | None = None
    ) -> Outcome:
        """
        Authenticate a single request.

        :param request: object exposing ``headers``, ``body`` and ``query``.
        :param bad_request_message: message for a missing-credentials rejection.
        :return: Authenticated, Rejected or Errored. Never raises.
        """
        raise NotImplementedError()
