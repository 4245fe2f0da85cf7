"""
Persistent session storage for the API client.

The session is a small JSON file with exactly two keys, the bearer token
and the minimal user object. Both are written and cleared together.
"""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"
DEFAULT_PATH = "~/.blog_engine/session.json"


class SessionStorage:
    """Token and user persisted across client restarts."""

    def __init__(self, path=None):
        self.path = Path(path or DEFAULT_PATH).expanduser()

    def _read(self):
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            return {}
        except ValueError:
            logger.warning("Ignoring unreadable session file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    @property
    def token(self):
        return self._read().get(TOKEN_KEY)

    @property
    def user(self):
        return self._read().get(USER_KEY)

    def save(self, token, user):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({TOKEN_KEY: token, USER_KEY: user}))

    def clear(self):
        self.path.unlink(missing_ok=True)
