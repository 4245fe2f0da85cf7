"""
User model for django-blog-engine.

Set AUTH_USER_MODEL = "blog_engine.User" in the host project.
"""
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Blog account.

    Adds a role used for admin-only routes and a free-form profile object.
    Passwords go through Django's hashers and are never serialized.
    """

    ROLE_USER = "user"
    ROLE_ADMIN = "admin"
    ROLE_CHOICES = [
        (ROLE_USER, "User"),
        (ROLE_ADMIN, "Admin"),
    ]

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER)
    profile = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["username"]

    def __str__(self):
        return self.username

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN
