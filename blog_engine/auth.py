"""
Bearer token authentication for API views.
"""
import logging

from django.contrib.auth import get_user_model

from .exceptions import AuthenticationError, AuthorizationError
from .tokens import decode_token

logger = logging.getLogger(__name__)


def get_bearer_token(request):
    """Return the token from an "Authorization: Bearer <token>" header."""
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError()
    return token


def authenticate(request):
    """Resolve the request's bearer token to an active user."""
    user_id = decode_token(get_bearer_token(request))
    User = get_user_model()
    try:
        return User.objects.get(pk=user_id, is_active=True)
    except User.DoesNotExist:
        logger.warning("Token for unknown or inactive user %s", user_id)
        raise AuthenticationError() from None


def require_role(user, *roles):
    if user.role not in roles:
        logger.warning("User %s (role %s) refused on role-gated route", user.pk, user.role)
        raise AuthorizationError(f"User role {user.role} is not authorized to access this route")
