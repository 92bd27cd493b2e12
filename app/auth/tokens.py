# =============================================================================
# app/auth/tokens.py - Bearer Token Issue/Verify
# =============================================================================
# Stateless HS256 JWTs signed with settings.SECRET_KEY.
#
# Payload: {id, role, status, name, iat, exp}
#
# Verification never touches the database. The role/status inside a token
# are whatever they were at login time; there is no revocation.
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.config import settings
from app.exceptions import UnauthorizedError
from core.models.user import Claims

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def issue_token(
    user: Mapping[str, Any] | Claims,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Sign a token for a user row (or an existing set of claims).

    Args:
        user: Anything with id, role, status and name
        expires_delta: Lifetime override; defaults to TOKEN_EXPIRE_MINUTES

    Returns:
        The encoded JWT
    """
    claims = user if isinstance(user, Claims) else Claims.model_validate(dict(user))
    now = datetime.now(timezone.utc)
    lifetime = expires_delta if expires_delta is not None else timedelta(
        minutes=settings.TOKEN_EXPIRE_MINUTES
    )

    payload = {
        **claims.model_dump(mode="json"),
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> Claims:
    """
    Decode and verify a token.

    Returns:
        Claims: The identity asserted by the token

    Raises:
        UnauthorizedError: Bad signature, malformed token, bad claims, or expired
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        logger.warning("Token has expired")
        raise UnauthorizedError("Token has expired", suggestion="Log in again to get a new token")
    except JWTError as e:
        logger.warning(f"Token validation failed: {e}")
        raise UnauthorizedError("Invalid token")

    try:
        return Claims.model_validate(payload)
    except ValidationError:
        logger.warning("Token payload is missing or has invalid claims")
        raise UnauthorizedError("Invalid token")
