"""
Tests for the request validation forms.
"""
import pytest

from blog_engine.exceptions import ValidationError
from blog_engine.models import PublishedFilter
from blog_engine.validation import (
    MAX_ID,
    CategoryForm,
    PostForm,
    ProfileForm,
    TagForm,
    UserForm,
    is_identifier,
    parse_listing_params,
    parse_published,
    validate,
)


def field_errors(data, form_class, partial=False):
    with pytest.raises(ValidationError) as excinfo:
        validate(data, form_class, partial=partial)
    return {error["field"]: error["message"] for error in excinfo.value.errors}


class TestIdentifiers:
    @pytest.mark.parametrize("value", [1, "42", MAX_ID, str(MAX_ID)])
    def test_accepted(self, value):
        assert is_identifier(value)

    @pytest.mark.parametrize(
        "value", [0, -1, True, "abc", "1.5", "²", MAX_ID + 1, "9" * 25, None, 1.0]
    )
    def test_rejected(self, value):
        assert not is_identifier(value)


class TestPostForm:
    def test_valid_post(self, category, tag):
        body = {"title": "  T  ", "content": "C", "category": category.pk, "tags": [str(tag.pk)]}
        cleaned = validate(body, PostForm)
        assert cleaned["title"] == "T"
        assert cleaned["category"] == category
        assert list(cleaned["tags"]) == [tag]
        assert "published" not in cleaned

    def test_missing_fields_all_reported(self):
        errors = field_errors({}, PostForm)
        assert errors == {
            "title": "Title is required",
            "content": "Content is required",
            "category": "Valid category ID is required",
        }

    def test_length_limits(self, category):
        errors = field_errors(
            {"title": "t" * 201, "content": "c", "excerpt": "e" * 501, "category": category.pk},
            PostForm,
        )
        assert errors == {
            "title": "Title cannot be more than 200 characters",
            "excerpt": "Excerpt cannot be more than 500 characters",
        }

    def test_padding_does_not_count_toward_length(self, category):
        cleaned = validate(
            {"title": "  " + "t" * 200 + "  ", "content": "c", "category": category.pk},
            PostForm,
        )
        assert cleaned["title"] == "t" * 200

    @pytest.mark.parametrize("value", ["abc", 0, True, 999, 10 ** 30])
    def test_category_must_exist(self, db, value):
        errors = field_errors({"title": "t", "content": "c", "category": value}, PostForm)
        assert errors == {"category": "Valid category ID is required"}

    def test_bad_tags(self, category):
        errors = field_errors(
            {"title": "t", "content": "c", "category": category.pk, "tags": ["x"]}, PostForm
        )
        assert errors == {"tags": "Tags must be a list of valid IDs"}

    def test_unknown_tags(self, category):
        errors = field_errors(
            {"title": "t", "content": "c", "category": category.pk, "tags": [999]}, PostForm
        )
        assert errors == {"tags": "One or more tags do not exist"}

    def test_published_must_be_boolean(self, category):
        errors = field_errors(
            {"title": "t", "content": "c", "category": category.pk, "published": "yes"},
            PostForm,
        )
        assert errors == {"published": "Published must be true or false"}

    def test_partial_only_checks_present_fields(self, db):
        assert validate({"published": True}, PostForm, partial=True) == {"published": True}

    def test_partial_still_rejects_blank_required(self, db):
        errors = field_errors({"title": "  "}, PostForm, partial=True)
        assert errors == {"title": "Title is required"}


class TestUserForm:
    def test_username_length(self):
        errors = field_errors({"username": "ab", "email": "a@b.co", "password": "secret"}, UserForm)
        assert errors == {"username": "Username must be between 3-30 characters"}

    def test_username_stripped_before_length_check(self):
        errors = field_errors(
            {"username": "  ab  ", "email": "a@b.co", "password": "secret"}, UserForm
        )
        assert errors == {"username": "Username must be between 3-30 characters"}

    def test_password_not_stripped(self):
        cleaned = validate(
            {"username": "abc", "email": " a@b.co ", "password": " secret "}, UserForm
        )
        assert cleaned["password"] == " secret "
        assert cleaned["email"] == "a@b.co"

    def test_email_and_password(self):
        errors = field_errors({"username": "abc", "email": "nope", "password": "123"}, UserForm)
        assert errors == {
            "email": "Please enter a valid email",
            "password": "Password must be at least 6 characters",
        }

    def test_role_choices(self):
        errors = field_errors(
            {"username": "abc", "email": "a@b.co", "password": "secret", "role": "root"},
            UserForm,
        )
        assert errors == {"role": "Role must be one of user, admin"}


class TestProfileForm:
    def test_profile_must_be_object(self):
        errors = field_errors({"profile": ["bio"]}, ProfileForm, partial=True)
        assert errors == {"profile": "Profile must be an object"}

    def test_empty_profile_allowed(self):
        assert validate({"profile": {}}, ProfileForm, partial=True) == {"profile": {}}


class TestTaxonomyForms:
    def test_name_length(self):
        errors = field_errors({"name": "n" * 51}, CategoryForm)
        assert errors == {"name": "Category name cannot be more than 50 characters"}

    def test_padded_name_within_limit(self):
        assert validate({"name": "  " + "n" * 50 + "  "}, CategoryForm) == {"name": "n" * 50}

    def test_tag_name_length(self):
        errors = field_errors({"name": "n" * 31}, TagForm)
        assert errors == {"name": "Tag name cannot be more than 30 characters"}

    def test_body_must_be_object(self):
        with pytest.raises(ValidationError):
            validate(["name"], CategoryForm)


class TestListingParams:
    def test_published_defaults_to_published_only(self):
        assert parse_published(None) is PublishedFilter.PUBLISHED

    @pytest.mark.parametrize(
        "raw, expected",
        [("all", PublishedFilter.ALL), ("true", PublishedFilter.PUBLISHED),
         ("false", PublishedFilter.DRAFTS), ("ALL", PublishedFilter.ALL)],
    )
    def test_published_values(self, raw, expected):
        assert parse_published(raw) is expected

    def test_published_garbage_rejected(self):
        with pytest.raises(ValidationError):
            parse_published("maybe")

    def test_defaults(self, settings):
        page, limit, filters = parse_listing_params({})
        assert page == 1
        assert limit == 5  # POSTS_PER_PAGE in test settings
        assert filters["category"] is None
        assert filters["search"] is None

    def test_limit_capped(self):
        _, limit, _ = parse_listing_params({"limit": "1000"})
        assert limit == 100

    def test_bad_page_rejected(self):
        with pytest.raises(ValidationError):
            parse_listing_params({"page": "0"})

    @pytest.mark.parametrize("name", ["category", "tag", "author", "page", "limit"])
    def test_ids_beyond_database_range_rejected(self, name):
        with pytest.raises(ValidationError):
            parse_listing_params({name: "9999999999999999999999999"})
