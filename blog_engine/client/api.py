"""
HTTP service layer for the blog API.

Every request carries the stored bearer token. A response hook watches
for 401 responses: it clears the stored session and calls on_unauthorized,
which the client wires to navigation to the login view.
"""
import logging

import requests

from .storage import SessionStorage

logger = logging.getLogger(__name__)


class APIError(Exception):
    """A failed API call, carrying the envelope's error text."""

    def __init__(self, message, status=None, errors=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.errors = errors or []


class BlogAPI:
    """
    Thin wrapper over the REST endpoints.

    Methods return the decoded success envelope and raise APIError for
    anything else. Nothing is retried.
    """

    def __init__(self, base_url="http://localhost:8000/api", storage=None,
                 timeout=10, on_unauthorized=None, session=None):
        self.base_url = base_url.rstrip("/")
        self.storage = storage or SessionStorage()
        self.timeout = timeout
        self.on_unauthorized = on_unauthorized
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.session.hooks["response"].append(self._handle_unauthorized)

    def _handle_unauthorized(self, response, *args, **kwargs):
        if response.status_code == 401:
            logger.warning("Unauthorized response from %s, clearing session", response.url)
            self.storage.clear()
            if self.on_unauthorized is not None:
                self.on_unauthorized()
        return response

    def request(self, method, path, **kwargs):
        headers = kwargs.pop("headers", {})
        token = self.storage.token
        if token:
            headers["Authorization"] = f"Bearer {token}"

        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise APIError(f"Could not reach the server: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if not response.ok or not payload.get("success", False):
            raise APIError(
                payload.get("error") or f"HTTP {response.status_code}",
                status=response.status_code,
                errors=payload.get("errors"),
            )
        return payload

    # Auth

    def register(self, username, email, password, role=None):
        data = {"username": username, "email": email, "password": password}
        if role:
            data["role"] = role
        return self.request("POST", "auth/register", json=data)

    def login(self, email, password):
        return self.request("POST", "auth/login", json={"email": email, "password": password})

    def me(self):
        return self.request("GET", "auth/me")

    def update_details(self, **fields):
        return self.request("PUT", "auth/updatedetails", json=fields)

    def update_password(self, current_password, new_password):
        return self.request(
            "PUT",
            "auth/updatepassword",
            json={"currentPassword": current_password, "newPassword": new_password},
        )

    # Posts

    def list_posts(self, **params):
        return self.request("GET", "posts", params=params)

    def get_post(self, post_id):
        return self.request("GET", f"posts/{post_id}")

    def create_post(self, data):
        return self.request("POST", "posts", json=data)

    def update_post(self, post_id, data):
        return self.request("PUT", f"posts/{post_id}", json=data)

    def delete_post(self, post_id):
        return self.request("DELETE", f"posts/{post_id}")

    def like_post(self, post_id):
        return self.request("PUT", f"posts/{post_id}/like")

    def posts_by_category(self, category_id):
        return self.request("GET", f"posts/category/{category_id}")

    # Categories

    def list_categories(self):
        return self.request("GET", "categories")

    def get_category(self, category_id):
        return self.request("GET", f"categories/{category_id}")

    def create_category(self, data):
        return self.request("POST", "categories", json=data)

    def update_category(self, category_id, data):
        return self.request("PUT", f"categories/{category_id}", json=data)

    def delete_category(self, category_id):
        return self.request("DELETE", f"categories/{category_id}")
