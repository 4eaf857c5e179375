from tokenauth.authentication.strategies.token import TokenStrategy, VerifyCallback

__all__ = ["TokenStrategy", "VerifyCallback"]
