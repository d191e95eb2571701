"""
Bearer token authentication.

Resolves ``Authorization: Bearer <token>`` to a user by the SHA-256 digest
stored at registration, and guards role-restricted routes.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from alexandria.core.database.entities.users import User
from alexandria.core.database.repositories.bundle import SqlRepoBundle
from alexandria.core.errors import AuthenticationError, PermissionDeniedError
from alexandria.core.logging_config import get_logger
from alexandria.users import UserService

from .repos import get_repos

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    repos: SqlRepoBundle = Depends(get_repos),
) -> User:
    """
    Authenticate the request.

    Raises:
        AuthenticationError: No bearer token, or the token matches no user
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Unauthenticated.")
    user = await UserService(repos).authenticate(credentials.credentials)
    if user is None:
        logger.info("Rejected request with an unknown bearer token")
        raise AuthenticationError("Unauthenticated.")
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    repos: SqlRepoBundle = Depends(get_repos),
) -> Optional[User]:
    if credentials is None or not credentials.credentials:
        return None
    return await UserService(repos).authenticate(credentials.credentials)


async def require_educator(user: User = Depends(get_current_user)) -> User:
    if not user.is_educator:
        raise PermissionDeniedError("Only educators can access this feature")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise PermissionDeniedError("Admin access required")
    return user
