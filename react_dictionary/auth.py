"""
Authentication module for React Dictionary.

Handles JWT validation for the admin review endpoints.
"""
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from react_dictionary.config import settings

ADMIN_ROLE = "admin"

security = HTTPBearer(auto_error=False)


class AuthError(Exception):
    """Custom exception for authentication errors."""
    def __init__(self, message: str, status_code: int = 401):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


def decode_admin_token(token: str, secret: str = None, algorithm: str = None) -> dict:
    """
    Decode a token and check that it carries the admin role.

    Raises:
        AuthError: If admin access is not configured, or the token is invalid
            or lacks the admin role
    """
    secret = secret if secret is not None else settings.admin_jwt_secret
    algorithm = algorithm or settings.admin_jwt_algorithm
    if not secret:
        raise AuthError("Admin access is not configured", status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm], options={"verify_aud": False})
    except JWTError as e:
        raise AuthError(f"Invalid authentication token: {str(e)}")

    if payload.get("role") != ADMIN_ROLE:
        raise AuthError("Token missing admin role", status_code=status.HTTP_403_FORBIDDEN)
    return payload


async def require_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> str:
    """
    Validate the bearer token of an admin request.

    Returns:
        The token subject, also stored on request.state.admin
    """
    try:
        if credentials is None:
            raise AuthError("Missing bearer token")
        payload = decode_admin_token(credentials.credentials)
    except AuthError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    admin = payload.get("sub", ADMIN_ROLE)
    request.state.admin = admin
    return admin
