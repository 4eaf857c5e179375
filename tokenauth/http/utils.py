from collections.abc import Mapping
from typing import Any

from tokenauth.authentication.errors import BadRequestError

UNAUTHORIZED = "Unauthorized"


def get_failure_response(info: Any) -> tuple[int, str]:
    """
    Map the info of a rejected outcome to an HTTP status and detail message.
    """
    if isinstance(info, BadRequestError):
        return info.status, info.message
    if isinstance(info, str) and info:
        return 401, info
    if isinstance(info, Mapping) and info.get("message"):
        return 401, str(info["message"])
    return 401, UNAUTHORIZED
