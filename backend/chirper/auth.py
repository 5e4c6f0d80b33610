"""
Chirper Backend: Caller Identity
================================

What:  Resolves "the current caller, or nobody" for a request.
How:   Reads `Authorization: Bearer <token>`, verifies the token as an HS256
       JWT signed with JWT_SECRET_KEY, and loads the User named by its `sub`
       claim from the request's database session.
Who:   `get_current_user` is a FastAPI dependency on every authenticated
       route. `create_access_token` mints tokens for operators and tests.

Token claims:
    sub  user id, as a string
    iat  issued-at (UTC)
    exp  expiry, JWT_ACCESS_TOKEN_EXPIRES_MINUTES after iat

Every failure (no header, other scheme, bad signature, expired, subject not
an integer, user deleted) raises AuthenticationError, which the global
handler turns into 401 {"message": "Unauthenticated."}.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chirper.config import settings
from chirper.database import get_db_session
from chirper.exceptions import AuthenticationError
from chirper.models.user import User

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must reach our handler as a 401,
# not FastAPI's default 403.
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed bearer token for `user_id`."""
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (expires_delta or settings.jwt_access_token_expires)
    claims = {"sub": str(user_id), "iat": issued_at, "exp": expires_at}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """
    Verify `token` and return the user id it was issued for.

    Raises:
        AuthenticationError: signature, expiry or subject is invalid
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError(reason="token expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(reason=f"invalid token: {type(e).__name__}") from e

    try:
        return int(claims["sub"])
    except (TypeError, ValueError) as e:
        raise AuthenticationError(reason="token subject is not a user id") from e


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """
    FastAPI dependency returning the authenticated User.

    Runs before the route reads the request body, so an anonymous request
    gets 401 whatever it sent.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(reason="missing bearer token")

    user_id = decode_access_token(credentials.credentials)

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise AuthenticationError(reason="unknown user", context={"user_id": user_id})

    request.state.user_id = user.id
    return user
