"""Authentication utilities - JWT verification.

Tokens are issued by the agency platform; the Oracle shares its signing key
and only needs to read the subject and role claims back.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from oracle.config import settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TOKEN_LIFETIME = timedelta(days=7)  # matches the platform's login tokens
REQUIRED_CLAIMS = ("sub", "exp")


def create_access_token(
    user_id: str,
    role: str,
    lifetime: Optional[timedelta] = None,
) -> str:
    """Sign a token the way the platform does. Used by tooling and tests."""
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + (lifetime or DEFAULT_TOKEN_LIFETIME),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify signature and expiry.

    Returns the claims, or None for a bad, expired or incomplete token.
    """
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.debug(f"Rejected access token: {e}")
        return None

    if any(not claims.get(name) for name in REQUIRED_CLAIMS):
        return None
    return claims
