"""
JSON representations of blog_engine models.

Keys are camelCase to match the API contract. The password hash is
never part of any representation.
"""
from django.forms.models import model_to_dict


def _timestamp(value):
    return value.isoformat() if value else None


def serialize_user(user):
    return {
        "id": user.pk,
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "profile": user.profile or {},
        "createdAt": _timestamp(user.date_joined),
    }


def serialize_author(user):
    """Public subset of a user shown on posts."""
    return {
        "id": user.pk,
        "username": user.username,
        "profile": user.profile or {},
    }


def serialize_category(category):
    data = model_to_dict(category, fields=["id", "name", "slug", "description", "created_by"])
    data["createdBy"] = data.pop("created_by")
    # timestamps are not editable, so model_to_dict skips them
    data["createdAt"] = _timestamp(category.created_at)
    data["updatedAt"] = _timestamp(category.updated_at)
    return data


def serialize_tag(tag):
    return model_to_dict(tag, fields=["id", "name", "slug", "description"])


def serialize_post(post):
    return {
        "id": post.pk,
        "title": post.title,
        "slug": post.slug,
        "content": post.content,
        "excerpt": post.excerpt,
        "featuredImage": post.featured_image,
        "author": serialize_author(post.author),
        "category": {
            "id": post.category.pk,
            "name": post.category.name,
            "slug": post.category.slug,
        },
        "tags": [{"id": t.pk, "name": t.name, "slug": t.slug} for t in post.tags.all()],
        "published": post.published,
        "readTime": post.read_time,
        "views": post.views,
        "likes": [u.pk for u in post.likes.all()],
        "createdAt": _timestamp(post.created_at),
        "updatedAt": _timestamp(post.updated_at),
    }
