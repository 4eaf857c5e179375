from tokenauth.authentication.base import (
    Authenticated,
    BaseAuthStrategy,
    Errored,
    HTTPRequest,
    Outcome,
    Rejected,
    dispatch,
)
from tokenauth.authentication.errors import (
    AuthenticationError,
    BadRequestError,
    ConfigurationError,
    VerifierTimeoutError,
)
from tokenauth.authentication.manager import AuthManager
from tokenauth.authentication.options import TokenStrategyOptions
from tokenauth.authentication.registry import register_authentication_strategy
from tokenauth.authentication.strategies.token import TokenStrategy

__all__ = [
    "AuthManager",
    "Authenticated",
    "AuthenticationError",
    "BadRequestError",
    "BaseAuthStrategy",
    "ConfigurationError",
    "Errored",
    "HTTPRequest",
    "Outcome",
    "Rejected",
    "TokenStrategy",
    "TokenStrategyOptions",
    "VerifierTimeoutError",
    "dispatch",
    "register_authentication_strategy",
]
