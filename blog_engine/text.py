"""
Derived text fields for posts, categories and tags.

These are plain functions so every write path calls them explicitly:

    >>> slugify("Hello, World!!")
    'hello-world'
    >>> read_time("word " * 201)
    2
"""
import math
import re

from .conf import blog_settings

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9 ]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(text):
    """
    Build a URL-safe slug from a title or name.

    Lowercases, drops everything outside [a-z0-9 and space], turns runs of
    whitespace into a single hyphen and collapses repeated hyphens.
    """
    slug = text.strip().lower()
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    return _HYPHENS.sub("-", slug)


def word_count(content):
    return len(content.split())


def read_time(content):
    """Return the reading time in whole minutes, rounded up."""
    return math.ceil(word_count(content) / blog_settings.WORDS_PER_MINUTE)


def derive_excerpt(content):
    """Return the leading slice of content followed by an ellipsis."""
    return content[:blog_settings.EXCERPT_LENGTH] + "..."
