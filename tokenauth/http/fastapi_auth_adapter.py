import logging

from fastapi import HTTPException, Request
from starlette import status

from tokenauth.authentication.base import dispatch
from tokenauth.authentication.manager import AuthManager
from tokenauth.http.request import RequestView
from tokenauth.http.utils import get_failure_response

logger = logging.getLogger("tokenauth.http")


def build_fastapi_auth_dependency(
    auth_manager: AuthManager, *, bad_request_message: str | None = None
):
    def success(user, info):
        return user

    def fail(info):
        status_code, detail = get_failure_response(info)
        raise HTTPException(status_code=status_code, detail=detail)

    def error(err):
        logger.error(f"Authentication error: {err!r}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        )

    async def auth_dependency(request: Request):
        view = await RequestView.from_request(request)
        outcome = await auth_manager.authenticate(view, bad_request_message=bad_request_message)
        return dispatch(outcome, success=success, fail=fail, error=error)

    return auth_dependency
