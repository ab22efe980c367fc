# lexia/api/dependencies.py
"""FastAPI dependencies: shared services and bearer-token authentication."""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lexia.errors import AuthenticationError
from lexia.tools.services import Services

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_services(request: Request) -> Services:
    return request.app.state.services


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    services: Services = Depends(get_services),
) -> str:
    """
    Resolve the caller from an "Authorization: Bearer <token>" header.

    Raises:
        AuthenticationError: If the header is missing or the token is unknown
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    user_id = await services.store.resolve_api_token(credentials.credentials)
    if user_id is None:
        logger.warning("Rejected request with unknown API token")
        raise AuthenticationError()
    return user_id
