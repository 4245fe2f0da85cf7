"""
Shared fixtures for django-blog-engine tests.
"""
import pytest
from django.contrib.auth import get_user_model

from blog_engine.models import Category, Post, Tag
from blog_engine.tokens import issue_token

User = get_user_model()


def make_post(author, category, tags=None, **fields):
    """Create a post through the same write path the API uses."""
    fields.setdefault("content", "This is a test post body.")
    post = Post(author=author)
    post.apply_changes({"category": category, **fields})
    post.save_with_tags(tags)
    return post


def auth_header(user):
    return {"HTTP_AUTHORIZATION": f"Bearer {issue_token(user)}"}


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username="testuser",
        email="test@example.com",
        password="testpass123",
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        username="otheruser",
        email="other@example.com",
        password="otherpass123",
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        username="admin",
        email="admin@example.com",
        password="adminpass123",
        role=User.ROLE_ADMIN,
    )


@pytest.fixture
def category(db, admin_user):
    """Create a test category."""
    category = Category(created_by=admin_user)
    category.apply_changes({"name": "Test Category"})
    category.save()
    return category


@pytest.fixture
def tag(db):
    """Create a test tag."""
    tag = Tag()
    tag.apply_changes({"name": "django"})
    tag.save()
    return tag


@pytest.fixture
def post(db, user, category):
    """Create a published test post."""
    return make_post(user, category, title="Test Post", published=True)


@pytest.fixture
def api(client):
    """Django test client sending and receiving JSON."""

    class JsonClient:
        def __init__(self, django_client):
            self.client = django_client

        def _send(self, method, path, data=None, user=None, **extra):
            if user is not None:
                extra.update(auth_header(user))
            if data is not None:
                extra["data"] = data
                extra["content_type"] = "application/json"
            return getattr(self.client, method)(path, **extra)

        def get(self, path, data=None, user=None, **extra):
            if user is not None:
                extra.update(auth_header(user))
            return self.client.get(path, data or {}, **extra)

        def post(self, path, data=None, user=None, **extra):
            return self._send("post", path, data, user, **extra)

        def put(self, path, data=None, user=None, **extra):
            return self._send("put", path, data, user, **extra)

        def delete(self, path, user=None, **extra):
            return self._send("delete", path, None, user, **extra)

    return JsonClient(client)
