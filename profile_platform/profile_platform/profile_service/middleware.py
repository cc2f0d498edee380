"""
Bearer-token guard for protected routes.

``protect`` is a FastAPI dependency: it admits a request carrying a valid
``Authorization: Bearer <token>`` header and attaches the identity to
``request.state.user``, or ends the request with a 401 JSON response of the
form ``{"message": ...}``.
"""
import logging
from typing import Optional

from fastapi import Header, Request, status
from fastapi.responses import JSONResponse

from .auth import TokenAuthenticator
from .schemas import Identity

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised by ``protect`` to short-circuit a request with a 401."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"message": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_authenticator(request: Request) -> TokenAuthenticator:
    return request.app.state.authenticator


def protect(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> Identity:
    # Plain def: FastAPI runs it in the threadpool, off the event loop.
    authenticator = get_authenticator(request)
    result = authenticator.authenticate(authorization)

    client_ip = request.client.host if request.client else "unknown"
    if not result.admitted:
        logger.warning(
            "AUTH rejected path=%s ip=%s reason=%s",
            request.url.path, client_ip, result.reason
        )
        raise AuthenticationError(result.reason)

    logger.debug("AUTH admitted path=%s ip=%s user=%s", request.url.path, client_ip, result.identity)
    request.state.user = result.identity
    return Identity(id=result.identity)
