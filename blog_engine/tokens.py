"""
Bearer token issue and verification.

Tokens are JWTs signed with BLOG_ENGINE["JWT_SECRET"] (SECRET_KEY by
default) carrying the user id and an expiry.
"""
import logging
from datetime import datetime, timedelta, timezone

import jwt

from .conf import blog_settings
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def issue_token(user, now=None):
    """Return a signed token for user, valid for JWT_EXPIRE_DAYS."""
    now = now or datetime.now(timezone.utc)
    payload = {
        "id": user.pk,
        "iat": now,
        "exp": now + timedelta(days=blog_settings.JWT_EXPIRE_DAYS),
    }
    return jwt.encode(payload, blog_settings.JWT_SECRET, algorithm=blog_settings.JWT_ALGORITHM)


def decode_token(token):
    """
    Return the user id carried by token.

    Raises AuthenticationError for expired, tampered or malformed tokens.
    """
    try:
        payload = jwt.decode(
            token,
            blog_settings.JWT_SECRET,
            algorithms=[blog_settings.JWT_ALGORITHM],
            options={"require": ["exp", "id"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise AuthenticationError("Token has expired") from None
    except jwt.InvalidTokenError as exc:
        logger.warning("Rejected invalid token: %s", exc)
        raise AuthenticationError() from None
    return payload["id"]
