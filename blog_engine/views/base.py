"""
Shared plumbing for the JSON views.
"""
import json

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from ..auth import authenticate, require_role
from ..exceptions import BlogEngineError, ValidationError
from ..models import User


class MethodNotAllowed(BlogEngineError):
    status_code = 405
    default_message = "Method not allowed"


def respond(data=None, status=200, **extra):
    """Build a success envelope. extra keys sit beside data."""
    return JsonResponse({"success": True, **extra, "data": data}, status=status)


def json_body(request):
    """Decode the request body, treating an empty body as {}."""
    if not request.body:
        return {}
    try:
        return json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError("Request body must be valid JSON") from None


@method_decorator(csrf_exempt, name="dispatch")
class ApiView(View):
    """
    Base class for JSON endpoints.

    HTTP methods named in login_required_methods need a valid bearer
    token; those in admin_required_methods need the admin role as well.
    The authenticated user is available as request.user.
    """

    login_required_methods = ()
    admin_required_methods = ()

    def dispatch(self, request, *args, **kwargs):
        method = request.method.lower()
        if method in self.login_required_methods or method in self.admin_required_methods:
            request.user = authenticate(request)
            if method in self.admin_required_methods:
                require_role(request.user, User.ROLE_ADMIN)
        return super().dispatch(request, *args, **kwargs)

    def http_method_not_allowed(self, request, *args, **kwargs):
        raise MethodNotAllowed(f"Method {request.method} not allowed on {request.path}")
