"""
JSON views for django-blog-engine.
"""
from .auth import LoginView, MeView, RegisterView, UpdateDetailsView, UpdatePasswordView
from .errors import api_root, page_not_found, server_error
from .posts import CategoryPostListView, PostDetailView, PostLikeView, PostListView
from .taxonomy import CategoryDetailView, CategoryListView, TagDetailView, TagListView

__all__ = [
    "RegisterView",
    "LoginView",
    "MeView",
    "UpdateDetailsView",
    "UpdatePasswordView",
    "PostListView",
    "PostDetailView",
    "PostLikeView",
    "CategoryPostListView",
    "CategoryListView",
    "CategoryDetailView",
    "TagListView",
    "TagDetailView",
    "api_root",
    "page_not_found",
    "server_error",
]
