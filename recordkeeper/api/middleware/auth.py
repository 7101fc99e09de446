"""JWT authentication for API requests.

The token carries the caller's organization and roles; this module turns
them into a CallerScope. It does not decide policy beyond the admin gate
on listing endpoints.
"""

import os
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from recordkeeper.api.exceptions import ForbiddenError, UnauthorizedError
from recordkeeper.api.middleware.context import update_request_context
from recordkeeper.observability.logging import get_logger
from recordkeeper.records.scope import CallerScope

logger = get_logger(__name__)

ADMIN_ROLE = "admin"
GLOBAL_ADMIN_ROLE = "global-admin"

security_scheme = HTTPBearer(auto_error=False)


def get_jwt_secret() -> str:
    """Get JWT secret from environment."""
    secret = os.environ.get("RECORDKEEPER_JWT_SECRET")
    if not secret:
        raise RuntimeError("RECORDKEEPER_JWT_SECRET environment variable not set")
    return secret


def get_jwt_algorithm() -> str:
    """Get JWT algorithm from environment."""
    return os.environ.get("RECORDKEEPER_JWT_ALGORITHM", "HS256")


def scope_from_claims(payload: dict) -> CallerScope:
    """Build a CallerScope from decoded JWT claims.

    A global admin is always an admin as well.

    Raises:
        UnauthorizedError: If the organization claim is missing or roles is
            not a list of strings
    """
    organization = payload.get("organization")
    if not organization:
        raise UnauthorizedError("Token missing organization claim")

    roles = payload.get("roles", [])
    if not isinstance(roles, list) or not all(isinstance(role, str) for role in roles):
        raise UnauthorizedError("Invalid token claims")

    is_global_admin = GLOBAL_ADMIN_ROLE in roles
    return CallerScope(
        organization=organization,
        user=payload.get("sub"),
        is_admin=is_global_admin or ADMIN_ROLE in roles,
        is_global_admin=is_global_admin,
    )


async def get_caller_scope(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security_scheme)],
) -> CallerScope:
    """Validate the bearer token and return the caller's scope.

    Raises:
        UnauthorizedError: If the token is missing, invalid or expired
    """
    if credentials is None:
        logger.warning("auth_missing_token", path=request.url.path)
        raise UnauthorizedError("Missing authentication token")

    try:
        payload = jwt.decode(
            credentials.credentials,
            get_jwt_secret(),
            algorithms=[get_jwt_algorithm()],
        )
        scope = scope_from_claims(payload)
    except JWTError as e:
        logger.warning("auth_jwt_error", error=str(e), path=request.url.path)
        raise UnauthorizedError("Invalid or expired token") from None
    except ValidationError as e:
        logger.warning("auth_validation_error", error=str(e), path=request.url.path)
        raise UnauthorizedError("Invalid token claims") from None

    update_request_context(organization=scope.organization, user=scope.user)
    logger.debug(
        "auth_success",
        organization=scope.organization,
        user=scope.user,
        is_admin=scope.is_admin,
    )
    return scope


CallerScopeDep = Annotated[CallerScope, Depends(get_caller_scope)]


async def require_admin(scope: CallerScopeDep) -> CallerScope:
    """Allow only organization or global administrators.

    Raises:
        ForbiddenError: If the caller is not an administrator
    """
    if not scope.is_admin:
        logger.warning("auth_admin_required", organization=scope.organization, user=scope.user)
        raise ForbiddenError("Administrator privilege required")
    return scope


AdminScopeDep = Annotated[CallerScope, Depends(require_admin)]
