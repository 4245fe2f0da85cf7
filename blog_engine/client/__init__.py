"""
Python client for the blog API.

    from blog_engine.client import create_client
    from blog_engine.client import store as actions

    store, navigator = create_client("http://localhost:8000/api")
    store.bootstrap()
    store.dispatch(actions.login, "me@example.com", "secret1")
"""
from .api import APIError, BlogAPI
from .storage import SessionStorage
from .store import ActionResult, BlogState, Store
from .views import Navigator, render


def create_client(base_url, storage_path=None, timeout=10):
    """Wire storage, API, store and navigator together."""
    navigator = Navigator()
    api = BlogAPI(
        base_url,
        storage=SessionStorage(storage_path),
        timeout=timeout,
        on_unauthorized=navigator.to_login,
    )
    return Store(api), navigator


__all__ = [
    "APIError",
    "ActionResult",
    "BlogAPI",
    "BlogState",
    "Navigator",
    "SessionStorage",
    "Store",
    "create_client",
    "render",
]
