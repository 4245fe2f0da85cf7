"""
Models for django-blog-engine.

All models are importable from blog_engine.models:

    from blog_engine.models import User, Post, Category, Tag
"""
from .users import User
from .posts import Category, Tag, Post, PostPage, PublishedFilter

__all__ = [
    "User",
    "Category",
    "Tag",
    "Post",
    "PostPage",
    "PublishedFilter",
]
