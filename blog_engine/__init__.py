"""
django-blog-engine - A JSON blogging API for Django.

Features:
- Users with roles and bearer-token (JWT) sessions
- Posts with derived slugs, excerpts and read times
- Categories and tags managed by admins
- Paginated, filterable, searchable post listing with view counts and likes
- A Python client with a persistent session and an in-memory store
"""

__version__ = "0.2.0"
__author__ = "Nestor Wheelock"
