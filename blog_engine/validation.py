"""
Request validation built on Django forms.

Each resource has a Form. Views call validate() on the decoded JSON body
before touching the database; all failing fields are reported together
in one ValidationError:

    validate(body, PostForm)                # create
    validate(body, PostForm, partial=True)  # update, only present fields

Forms are bound straight to the decoded JSON dict, so values arrive with
their JSON types. Text fields strip surrounding whitespace before length
checks run.
"""
from django import forms

from .conf import blog_settings
from .exceptions import ValidationError
from .models import Category, PublishedFilter, Tag, User

# Largest primary key the database can store (signed 64-bit)
MAX_ID = 2 ** 63 - 1


def is_identifier(value):
    """Primary keys are positive integers, given as int or digit string."""
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        if not (value.isascii() and value.isdigit()) or len(value) > len(str(MAX_ID)):
            return False
        value = int(value)
    return isinstance(value, int) and 0 < value <= MAX_ID


def field_messages(label, **overrides):
    """Error messages for a field, phrased around its label."""
    result = {
        "required": f"{label} is required",
        "invalid": f"{label} is not valid",
        "max_length": f"{label} cannot be more than %(limit_value)d characters",
        "min_length": f"{label} must be at least %(limit_value)d characters",
    }
    result.update(overrides)
    return result


def same_message(message):
    """Report every kind of failure of a field with one message."""
    codes = (
        "required", "invalid", "invalid_choice", "invalid_list",
        "invalid_pk_value", "max_length", "min_length",
    )
    return dict.fromkeys(codes, message)


class TypedField(forms.Field):
    """A decoded JSON value of one Python type, passed through unconverted."""

    widget = forms.TextInput

    def __init__(self, kind, **kwargs):
        self.kind = kind
        super().__init__(**kwargs)

    def to_python(self, value):
        if value is None:
            return None
        # bool is an int subclass; only accept it where bool is asked for
        if not isinstance(value, self.kind) or (isinstance(value, bool) and self.kind is not bool):
            raise forms.ValidationError(self.error_messages["invalid"], code="invalid")
        return value


class RecordField(forms.ModelChoiceField):
    """Primary key of an existing row; cleans to the model instance."""

    def to_python(self, value):
        if value in self.empty_values:
            return None
        if not is_identifier(value):
            raise forms.ValidationError(
                self.error_messages["invalid_choice"], code="invalid_choice"
            )
        return super().to_python(value)


class RecordListField(forms.ModelMultipleChoiceField):
    """List of primary keys of existing rows; cleans to a queryset."""

    def clean(self, value):
        if value not in self.empty_values and (
            not isinstance(value, list) or not all(is_identifier(item) for item in value)
        ):
            raise forms.ValidationError(self.error_messages["invalid_list"], code="invalid_list")
        return super().clean(value)


class ApiForm(forms.Form):
    """
    Form bound to a JSON object.

    With partial=True the fields absent from the data are dropped, so an
    update may carry any subset of them. Present fields keep their rules.
    """

    def __init__(self, data, partial=False, **kwargs):
        super().__init__(data, **kwargs)
        if partial:
            for name in list(self.fields):
                if name not in data:
                    del self.fields[name]

    def error_list(self):
        """First message per failing field, as [{"field", "message"}, ...]."""
        return [
            {"field": name, "message": problems[0]["message"]}
            for name, problems in self.errors.get_json_data().items()
        ]


class PostForm(ApiForm):
    title = forms.CharField(max_length=200, error_messages=field_messages("Title"))
    content = forms.CharField(error_messages=field_messages("Content"))
    excerpt = forms.CharField(max_length=500, required=False, error_messages=field_messages("Excerpt"))
    category = RecordField(
        queryset=Category.objects.all(),
        error_messages=same_message("Valid category ID is required"),
    )
    tags = RecordListField(
        queryset=Tag.objects.all(),
        required=False,
        error_messages={
            "invalid_list": "Tags must be a list of valid IDs",
            "invalid_pk_value": "Tags must be a list of valid IDs",
            "invalid_choice": "One or more tags do not exist",
        },
    )
    published = TypedField(
        bool, required=False, error_messages={"invalid": "Published must be true or false"}
    )
    featuredImage = forms.CharField(
        max_length=500, required=False, error_messages=field_messages("Featured image")
    )


class CategoryForm(ApiForm):
    name = forms.CharField(max_length=50, error_messages=field_messages("Category name"))
    description = forms.CharField(
        max_length=200, required=False, error_messages=field_messages("Description")
    )


class TagForm(ApiForm):
    name = forms.CharField(max_length=30, error_messages=field_messages("Tag name"))
    description = forms.CharField(required=False)


USERNAME_MESSAGE = "Username must be between 3-30 characters"
EMAIL_MESSAGE = "Please enter a valid email"
PASSWORD_MESSAGE = "Password must be at least 6 characters"
LOGIN_MESSAGE = "Please provide an email and password"


class UserForm(ApiForm):
    username = forms.CharField(
        min_length=3, max_length=30, error_messages=same_message(USERNAME_MESSAGE)
    )
    email = forms.EmailField(error_messages=same_message(EMAIL_MESSAGE))
    password = forms.CharField(
        min_length=6, strip=False, error_messages=same_message(PASSWORD_MESSAGE)
    )
    role = forms.ChoiceField(
        choices=User.ROLE_CHOICES,
        required=False,
        error_messages={
            "invalid_choice": "Role must be one of "
            + ", ".join(role for role, _ in User.ROLE_CHOICES),
        },
    )


class LoginForm(ApiForm):
    email = forms.CharField(error_messages=same_message(LOGIN_MESSAGE))
    password = forms.CharField(strip=False, error_messages=same_message(LOGIN_MESSAGE))


class ProfileForm(ApiForm):
    username = forms.CharField(
        min_length=3, max_length=30, required=False,
        error_messages=same_message(USERNAME_MESSAGE),
    )
    email = forms.EmailField(required=False, error_messages=same_message(EMAIL_MESSAGE))
    profile = TypedField(
        dict, required=False, error_messages={"invalid": "Profile must be an object"}
    )


class PasswordForm(ApiForm):
    currentPassword = forms.CharField(strip=False, error_messages=field_messages("Current password"))
    newPassword = forms.CharField(
        min_length=6, strip=False, error_messages=same_message(PASSWORD_MESSAGE)
    )


def validate(data, form_class, partial=False):
    """
    Check data with form_class and raise ValidationError listing every failure.

    Returns the cleaned values of the fields present in data: stripped
    text, model instances for ids and querysets for id lists.
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    form = form_class(data, partial=partial)
    if not form.is_valid():
        errors = form.error_list()
        raise ValidationError(_summarize(errors), errors=errors)
    return {name: value for name, value in form.cleaned_data.items() if name in data}


def _summarize(errors):
    messages = []
    for error in errors:
        if error["message"] not in messages:
            messages.append(error["message"])
    return "; ".join(messages)


def _positive_int(params, name, default):
    raw = params.get(name)
    if raw in (None, ""):
        return default
    if not is_identifier(raw):
        raise ValidationError.for_field(name, f"{name} must be a positive integer")
    return int(raw)


def parse_published(value):
    """
    Map the published query parameter to a PublishedFilter.

    Absent means published posts only; "all" must be asked for explicitly.
    """
    if value is None or value == "":
        return PublishedFilter.PUBLISHED
    try:
        return PublishedFilter(value.lower())
    except ValueError:
        raise ValidationError.for_field(
            "published", "published must be one of true, false, all"
        ) from None


def parse_listing_params(params):
    """Validate the query string of the post listing."""
    page = _positive_int(params, "page", 1)
    limit = min(
        _positive_int(params, "limit", blog_settings.POSTS_PER_PAGE),
        blog_settings.MAX_PAGE_SIZE,
    )
    filters = {
        "published": parse_published(params.get("published")),
        "category": _positive_int(params, "category", None),
        "tag": _positive_int(params, "tag", None),
        "author": _positive_int(params, "author", None),
        "search": (params.get("search") or "").strip() or None,
    }
    return page, limit, filters
