"""
Client-side state container.

BlogState is immutable. Actions are plain functions

    action(state, api, *args) -> (new_state, ActionResult)

and Store.dispatch() runs one with the loading flag set, then publishes
the new state to subscribers. Entities are merged by their "id": created
ones are prepended, updated ones replaced in place, deleted ones removed.
On failure the error is recorded and the collections are left as they
were.
"""
import logging
from dataclasses import dataclass, replace
from typing import Any, Optional

from .api import APIError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlogState:
    user: Optional[dict] = None
    posts: tuple = ()
    categories: tuple = ()
    loading: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class ActionResult:
    success: bool
    data: Any = None
    error: Optional[str] = None


def prepend(items, entity):
    return (entity,) + tuple(item for item in items if item["id"] != entity["id"])


def replace_by_id(items, entity):
    return tuple(entity if item["id"] == entity["id"] else item for item in items)


def remove_by_id(items, entity_id):
    return tuple(item for item in items if item["id"] != entity_id)


def _failure(state, exc, fallback):
    message = exc.message or fallback
    logger.debug("Action failed: %s", message)
    if exc.status == 401:
        state = replace(state, user=None)
    return replace(state, error=message), ActionResult(False, error=message)


def _ok(state, data=None, **changes):
    return replace(state, error=None, **changes), ActionResult(True, data=data)


# Auth

def login(state, api, email, password):
    try:
        payload = api.login(email, password)
    except APIError as exc:
        return _failure(state, exc, "Login failed")
    api.storage.save(payload["token"], payload["data"])
    return _ok(state, payload["data"], user=payload["data"])


def register(state, api, username, email, password, role=None):
    try:
        payload = api.register(username, email, password, role=role)
    except APIError as exc:
        return _failure(state, exc, "Registration failed")
    api.storage.save(payload["token"], payload["data"])
    return _ok(state, payload["data"], user=payload["data"])


def logout(state, api):
    api.storage.clear()
    return BlogState(), ActionResult(True)


def check_auth(state, api):
    """Confirm the persisted session is still valid; log out if not."""
    try:
        payload = api.me()
    except APIError:
        return logout(state, api)
    return _ok(state, payload["data"], user=payload["data"])


def update_profile(state, api, **fields):
    try:
        payload = api.update_details(**fields)
    except APIError as exc:
        return _failure(state, exc, "Failed to update profile")
    api.storage.save(api.storage.token, payload["data"])
    return _ok(state, payload["data"], user=payload["data"])


def update_password(state, api, current_password, new_password):
    try:
        payload = api.update_password(current_password, new_password)
    except APIError as exc:
        return _failure(state, exc, "Failed to update password")
    api.storage.save(payload["token"], payload["data"])
    return _ok(state, payload["data"], user=payload["data"])


# Posts

def load_posts(state, api, **params):
    try:
        payload = api.list_posts(**params)
    except APIError as exc:
        return _failure(state, exc, "Failed to load posts")
    return _ok(state, payload, posts=tuple(payload["data"]))


def get_post(state, api, post_id):
    """Fetch one post; a loaded copy is replaced with the fresh one."""
    try:
        payload = api.get_post(post_id)
    except APIError as exc:
        return _failure(state, exc, "Failed to load post")
    post = payload["data"]
    return _ok(state, post, posts=replace_by_id(state.posts, post))


def create_post(state, api, data):
    try:
        payload = api.create_post(data)
    except APIError as exc:
        return _failure(state, exc, "Failed to create post")
    post = payload["data"]
    return _ok(state, post, posts=prepend(state.posts, post))


def update_post(state, api, post_id, data):
    try:
        payload = api.update_post(post_id, data)
    except APIError as exc:
        return _failure(state, exc, "Failed to update post")
    post = payload["data"]
    return _ok(state, post, posts=replace_by_id(state.posts, post))


def delete_post(state, api, post_id):
    try:
        api.delete_post(post_id)
    except APIError as exc:
        return _failure(state, exc, "Failed to delete post")
    return _ok(state, posts=remove_by_id(state.posts, post_id))


def like_post(state, api, post_id):
    try:
        payload = api.like_post(post_id)
    except APIError as exc:
        return _failure(state, exc, "Failed to like post")
    post = payload["data"]
    return _ok(state, post, posts=replace_by_id(state.posts, post))


# Categories

def load_categories(state, api):
    try:
        payload = api.list_categories()
    except APIError as exc:
        return _failure(state, exc, "Failed to load categories")
    return _ok(state, payload["data"], categories=tuple(payload["data"]))


def create_category(state, api, data):
    try:
        payload = api.create_category(data)
    except APIError as exc:
        return _failure(state, exc, "Failed to create category")
    category = payload["data"]
    return _ok(state, category, categories=prepend(state.categories, category))


def update_category(state, api, category_id, data):
    try:
        payload = api.update_category(category_id, data)
    except APIError as exc:
        return _failure(state, exc, "Failed to update category")
    category = payload["data"]
    return _ok(state, category, categories=replace_by_id(state.categories, category))


def delete_category(state, api, category_id):
    try:
        api.delete_category(category_id)
    except APIError as exc:
        return _failure(state, exc, "Failed to delete category")
    return _ok(state, categories=remove_by_id(state.categories, category_id))


def clear_error(state, api):
    return _ok(state)


class Store:
    """
    Holds the current BlogState and runs actions against an API.

    Views receive the store explicitly and subscribe to state changes.
    """

    def __init__(self, api, state=None):
        self.api = api
        self.state = state or BlogState()
        self._subscribers = []

    def subscribe(self, callback):
        """Call callback(state) on every change. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, state):
        self.state = state
        for callback in list(self._subscribers):
            callback(state)

    def dispatch(self, action, *args, **kwargs):
        self._publish(replace(self.state, loading=True))
        state = self.state
        try:
            state, result = action(state, self.api, *args, **kwargs)
        finally:
            self._publish(replace(state, loading=False))
        return result

    def bootstrap(self):
        """Restore a persisted session, then load posts and categories."""
        storage = self.api.storage
        if storage.token and storage.user:
            self._publish(replace(self.state, user=storage.user))
            self.dispatch(check_auth)
        self.dispatch(load_posts)
        self.dispatch(load_categories)
        return self.state
