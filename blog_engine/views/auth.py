"""
Account endpoints: register, login, current user, profile and password.
"""
import logging

from django.db.models import Q
from django.http import JsonResponse

from ..conf import blog_settings
from ..exceptions import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from ..models import User
from ..serializers import serialize_user
from ..tokens import issue_token
from ..validation import LoginForm, PasswordForm, ProfileForm, UserForm, validate
from .base import ApiView, json_body, respond

logger = logging.getLogger(__name__)


def token_response(user, status=200):
    return JsonResponse(
        {"success": True, "token": issue_token(user), "data": serialize_user(user)},
        status=status,
    )


def ensure_account_unique(username=None, email=None, exclude=None):
    """Raise ConflictError if another account uses username or email."""
    others = User.objects.all()
    if exclude is not None:
        others = others.exclude(pk=exclude.pk)
    if username and others.filter(username__iexact=username).exists():
        raise ConflictError("Username is already taken")
    if email and others.filter(email__iexact=email).exists():
        raise ConflictError("Email is already registered")


class RegisterView(ApiView):
    """Create an account and return it with a token."""

    def post(self, request):
        body = validate(json_body(request), UserForm)
        role = body.get("role") or User.ROLE_USER
        if role == User.ROLE_ADMIN and not blog_settings.ALLOW_ADMIN_REGISTRATION:
            raise AuthorizationError("Admin accounts cannot be self-registered")

        username = body["username"]
        email = User.objects.normalize_email(body["email"])
        ensure_account_unique(username=username, email=email)

        user = User.objects.create_user(
            username=username,
            email=email,
            password=body["password"],
            role=role,
        )
        logger.info("Registered user %s (%s)", user.username, user.role)
        return token_response(user, status=201)


class LoginView(ApiView):
    """Exchange email and password for a token."""

    def post(self, request):
        body = validate(json_body(request), LoginForm)
        user = User.objects.filter(email__iexact=body["email"]).first()
        if user is None:
            # Run the hasher anyway so unknown emails take as long as bad passwords.
            User().set_password(body["password"])
            raise AuthenticationError("Invalid credentials")
        if not user.is_active or not user.check_password(body["password"]):
            raise AuthenticationError("Invalid credentials")

        logger.info("User %s logged in", user.username)
        return token_response(user)


class MeView(ApiView):
    login_required_methods = ("get",)

    def get(self, request):
        return respond(serialize_user(request.user))


class UpdateDetailsView(ApiView):
    """Change username, email and/or profile of the current user."""

    login_required_methods = ("put",)

    def put(self, request):
        body = validate(json_body(request), ProfileForm, partial=True)
        user = request.user

        username = body.get("username") or None
        email = body.get("email") or None
        if email:
            email = User.objects.normalize_email(email)
        ensure_account_unique(username=username, email=email, exclude=user)

        if username:
            user.username = username
        if email:
            user.email = email
        if body.get("profile") is not None:
            user.profile = body["profile"]
        user.save()
        return respond(serialize_user(user))


class UpdatePasswordView(ApiView):
    """Replace the password after checking the current one; returns a new token."""

    login_required_methods = ("put",)

    def put(self, request):
        body = validate(json_body(request), PasswordForm)
        user = request.user
        if not user.check_password(body["currentPassword"]):
            raise ValidationError.for_field("currentPassword", "Password is incorrect")

        user.set_password(body["newPassword"])
        user.save()
        logger.info("User %s changed password", user.username)
        return token_response(user)
