import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from tokenauth.authentication.base import (
    Authenticated,
    BaseAuthStrategy,
    Errored,
    HTTPRequest,
    Outcome,
    Rejected,
)
from tokenauth.authentication.errors import ConfigurationError
from tokenauth.authentication.registry import get_authentication_strategy

logger = logging.getLogger("tokenauth.authentication")


class AuthManager:
    def __init__(
        self,
        auth_settings: Mapping[str, Any],
        verifiers: Mapping[str, Callable[..., Any]] | None = None,
    ):
        self.auth_settings = auth_settings
        self.verifiers = verifiers or {}
        self.active_strategies: dict[str, BaseAuthStrategy] = {}
        self._setup_strategies()

    def _setup_strategies(self):
        enabled_keys = self.auth_settings.get("strategies", [])

        for key in enabled_keys:
            strategy_cls = get_authentication_strategy(key)
            if not strategy_cls:
                raise ConfigurationError(f"Strategy '{key}' is not registered.")

            verify = self.verifiers.get(key)
            if verify is None:
                raise ConfigurationError(f"No verify function supplied for strategy '{key}'.")

            specific_config = self.auth_settings.get(key) or {}
            self.active_strategies[key] = strategy_cls(specific_config, verify)

    def use(self, strategy: BaseAuthStrategy, name: str | None = None):
        self.active_strategies[name or strategy.name] = strategy

    async def authenticate(
        self,
        request: HTTPRequest,
        *,
        strategies: Iterable[str] | None = None,
        bad_request_message: str | None = None,
    ) -> Outcome:
        """
        Run the strategies in order until one of them settles the request.

        The first Authenticated or Errored outcome wins. When every strategy
        rejects the request, the last rejection is returned.
        """
        names = list(strategies) if strategies is not None else list(self.active_strategies)
        outcome: Outcome = Rejected()
        for name in names:
            strategy = self.active_strategies.get(name)
            if strategy is None:
                raise ConfigurationError(f"Unknown authentication strategy '{name}'.")
            outcome = await strategy.authenticate(
                request, bad_request_message=bad_request_message
            )
            if isinstance(outcome, Authenticated | Errored):
                logger.debug("Strategy '%s' settled request: %s", name, type(outcome).__name__)
                return outcome
        return outcome
