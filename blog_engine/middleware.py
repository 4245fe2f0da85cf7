"""
Error translation for the JSON API.

Add to MIDDLEWARE in the host project:

    "blog_engine.middleware.ApiErrorMiddleware",

Exceptions raised by blog_engine views become envelopes. Views from other
apps are left to Django's own handling.
"""
import logging

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.db import IntegrityError
from django.http import Http404, JsonResponse

from .exceptions import (
    AuthorizationError,
    BlogEngineError,
    ConflictError,
    NotFoundError,
    UnexpectedError,
)

logger = logging.getLogger(__name__)


def error_response(error):
    return JsonResponse(error.to_response(), status=error.status_code)


def translate_exception(exception):
    """Map any exception to the BlogEngineError a client should see."""
    if isinstance(exception, BlogEngineError):
        return exception
    if isinstance(exception, (Http404, ObjectDoesNotExist)):
        return NotFoundError()
    if isinstance(exception, PermissionDenied):
        return AuthorizationError()
    if isinstance(exception, IntegrityError):
        return ConflictError()
    return UnexpectedError()


class ApiErrorMiddleware:
    """Turn exceptions from API views into {success: false, ...} responses."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        match = request.resolver_match
        if match is None or "blog_engine" not in match.app_names:
            return None

        error = translate_exception(exception)
        if isinstance(error, UnexpectedError):
            logger.exception("Unhandled error on %s %s", request.method, request.path)
        elif error.status_code >= 500:
            logger.error("%s on %s %s", error.message, request.method, request.path)
        else:
            logger.warning(
                "%s %s -> %s %s", request.method, request.path, error.status_code, error.message
            )
        return error_response(error)
