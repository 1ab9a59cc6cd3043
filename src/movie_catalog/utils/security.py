"""Bearer token verification and role checks."""

from datetime import UTC, datetime, timedelta
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from movie_catalog.config import get_settings

# Reads are open, so a missing Authorization header is not an error here
bearer_scheme = HTTPBearer(auto_error=False)


def has_role(role: str | None, required_role: str) -> bool:
    """Return True when the caller's role satisfies the required role."""
    return role is not None and role == required_role


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a signed JWT access token.

    Tokens are normally issued by the identity provider; this helper exists
    for operators and tests.

    Args:
        data: Payload data to encode in the token, e.g.
              {"sub": "editor-1", "role": "admin"}.
        expires_delta: Optional custom expiration time. Defaults to 30 minutes.

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=30))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT access token.

    Returns:
        Decoded token payload if valid, None if invalid or expired
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None


async def get_current_role(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """Get the caller's role from an optional bearer token.

    Returns:
        The token's "role" claim, or None when no token was sent.

    Raises:
        HTTPException 401: If a token was sent but is invalid or expired
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    role = payload.get("role")
    return role if isinstance(role, str) else None


# Type alias for use in route dependencies
CurrentRole = Annotated[str | None, Depends(get_current_role)]
