"""
Authentication dependencies for FastAPI.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ibge_api.services.errors import UnauthenticatedError
from ibge_api.services.password_hasher import PasswordHasher
from ibge_api.services.token_service import TokenClaims, TokenService

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    """FastAPI dependency returning the application's token issuer."""
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    """FastAPI dependency returning the application's password hasher."""
    return request.app.state.password_hasher


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_service: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    FastAPI dependency to get the current authenticated user.

    Extracts the JWT from the Authorization header and validates its
    signature and expiry. No database lookup is made.

    Args:
        credentials: Bearer token from Authorization header
        token_service: Token issuer holding the signing key

    Returns:
        Claims of the verified token

    Raises:
        HTTPException: If not authenticated or token is invalid
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return token_service.decode_token(credentials.credentials)
    except UnauthenticatedError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
