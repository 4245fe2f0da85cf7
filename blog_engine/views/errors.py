"""
Envelope-shaped handler404/handler500 for the host project's root URLconf:

    handler404 = "blog_engine.views.page_not_found"
    handler500 = "blog_engine.views.server_error"
"""
from django.http import JsonResponse

from ..exceptions import UnexpectedError
from .base import respond


def page_not_found(request, exception=None):
    return JsonResponse(
        {"success": False, "error": f"Route {request.method} {request.path} not found"},
        status=404,
    )


def server_error(request):
    error = UnexpectedError()
    return JsonResponse(error.to_response(), status=error.status_code)


def api_root(request):
    """Describe the API."""
    return respond(
        {
            "message": "Blog API Server is running!",
            "endpoints": {
                "auth": request.build_absolute_uri("auth/"),
                "posts": request.build_absolute_uri("posts"),
                "categories": request.build_absolute_uri("categories"),
                "tags": request.build_absolute_uri("tags"),
            },
        }
    )
