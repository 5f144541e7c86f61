"""
Authentication dependencies for FastAPI.

The acting principal for ledger attribution comes from the bearer token;
there are no anonymous writes.
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from accountant_backend.app.core.exceptions import AuthenticationError
from accountant_backend.app.core.jwt import decode_access_token

# HTTP Bearer security scheme
security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    FastAPI dependency for JWT authentication.

    Returns:
        Decoded token payload containing user information (user_id, role, sub)

    Raises:
        AuthenticationError: 401 if the token is invalid or carries no user_id
    """
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Could not validate credentials")

    user_id = payload.get("user_id")
    if user_id is None or str(user_id) == "":
        raise AuthenticationError("Invalid token payload")

    return payload
