from tokenauth.http.asgi_auth_adapter import ASGIAuthenticationMiddleware
from tokenauth.http.fastapi_auth_adapter import build_fastapi_auth_dependency
from tokenauth.http.request import RequestView

__all__ = [
    "ASGIAuthenticationMiddleware",
    "RequestView",
    "build_fastapi_auth_dependency",
]
