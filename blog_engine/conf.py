"""
Configuration settings for django-blog-engine.

Override these in your Django settings.py:

    BLOG_ENGINE = {
        'JWT_SECRET': 'change-me',
        'JWT_EXPIRE_DAYS': 30,
        'POSTS_PER_PAGE': 10,
        ...
    }

Anything not overridden falls back to DEFAULTS below.
"""
from django.conf import settings

DEFAULTS = {
    # Bearer tokens
    "JWT_SECRET": None,  # None means settings.SECRET_KEY
    "JWT_ALGORITHM": "HS256",
    "JWT_EXPIRE_DAYS": 30,

    # Registration
    "ALLOW_ADMIN_REGISTRATION": True,

    # Listing
    "POSTS_PER_PAGE": 10,
    "MAX_PAGE_SIZE": 100,

    # Derived post fields
    "EXCERPT_LENGTH": 150,
    "WORDS_PER_MINUTE": 200,
}


class BlogEngineSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from blog_engine.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid blog_engine setting: {name}")

        user_settings = getattr(settings, "BLOG_ENGINE", {})
        return user_settings.get(name, DEFAULTS[name])

    @property
    def JWT_SECRET(self):
        """Return the token signing secret, defaulting to SECRET_KEY."""
        user_settings = getattr(settings, "BLOG_ENGINE", {})
        return user_settings.get("JWT_SECRET") or settings.SECRET_KEY


blog_settings = BlogEngineSettings()
