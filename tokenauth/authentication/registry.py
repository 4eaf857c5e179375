from tokenauth.authentication.base import BaseAuthStrategy

STRATEGY_REGISTRY: dict[str, type[BaseAuthStrategy]] = {}


def register_authentication_strategy(name: str):
    """Decorator to register a strategy class with a unique key."""

    def decorator(cls: type[BaseAuthStrategy]):
        cls.name = name
        STRATEGY_REGISTRY[name] = cls
        return cls

    return decorator


def get_authentication_strategy(name: str) -> type[BaseAuthStrategy] | None:
    return STRATEGY_REGISTRY.get(name)
