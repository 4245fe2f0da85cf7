"""
Post, Category, and Tag models for django-blog-engine.

Derived fields (slug, excerpt, read_time) are computed by the
apply_changes() methods, which every create/update path calls before
saving. Nothing is derived implicitly inside save().
"""
import enum
import math
from dataclasses import dataclass

from django.conf import settings
from django.db import models, transaction
from django.db.models import F, Q
from django.utils import timezone

from ..exceptions import AuthorizationError, ConflictError
from ..text import derive_excerpt, read_time, slugify


class Category(models.Model):
    """
    Category for organizing posts.

    Every post belongs to exactly one category. Only admins manage them.
    """

    name = models.CharField(max_length=50, unique=True)
    slug = models.CharField(max_length=60, unique=True, null=True, blank=True)
    description = models.CharField(max_length=200, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name="blog_categories",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def apply_changes(self, changes):
        """Assign name/description and re-derive the slug if the name changed."""
        if "name" in changes:
            self.name = changes["name"].strip()
            self.slug = slugify(self.name) or None
        if "description" in changes:
            self.description = changes["description"] or ""

    def ensure_unique(self):
        """Raise ConflictError if another category has this name or slug."""
        clash = Q(name=self.name)
        if self.slug:
            clash |= Q(slug=self.slug)
        if Category.objects.filter(clash).exclude(pk=self.pk).exists():
            raise ConflictError(f"Category '{self.name}' already exists")

    def delete_checked(self):
        """Delete the category unless posts still reference it."""
        if self.posts.exists():
            raise ConflictError("Category still has posts and cannot be deleted")
        self.delete()


class Tag(models.Model):
    """
    Flat tag for posts.

    Names are stored lowercase and are unique regardless of case.
    """

    name = models.CharField(max_length=30, unique=True)
    slug = models.CharField(max_length=40, unique=True, null=True, blank=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def apply_changes(self, changes):
        if "name" in changes:
            self.name = changes["name"].strip().lower()
            self.slug = slugify(self.name) or None
        if "description" in changes:
            self.description = changes["description"] or ""

    def ensure_unique(self):
        clash = Q(name__iexact=self.name)
        if self.slug:
            clash |= Q(slug=self.slug)
        if Tag.objects.filter(clash).exclude(pk=self.pk).exists():
            raise ConflictError(f"Tag '{self.name}' already exists")


class PublishedFilter(enum.Enum):
    """Which publication states a listing includes."""

    PUBLISHED = "true"
    DRAFTS = "false"
    ALL = "all"


@dataclass
class PostPage:
    """One page of a post listing."""

    items: list
    total: int
    pages: int


class PostQuerySet(models.QuerySet):
    def with_relations(self):
        return self.select_related("author", "category").prefetch_related("tags", "likes")

    def published(self):
        return self.filter(published=True)

    def listing(self, published=PublishedFilter.PUBLISHED, category=None,
                tag=None, author=None, search=None):
        """
        Filter posts for the public listing.

        category, tag and author match primary keys only. search matches
        title or content, case-insensitively.
        """
        qs = self
        if published is PublishedFilter.PUBLISHED:
            qs = qs.filter(published=True)
        elif published is PublishedFilter.DRAFTS:
            qs = qs.filter(published=False)
        if category is not None:
            qs = qs.filter(category_id=category)
        if tag is not None:
            qs = qs.filter(tags__id=tag)
        if author is not None:
            qs = qs.filter(author_id=author)
        if search:
            qs = qs.filter(Q(title__icontains=search) | Q(content__icontains=search))
        return qs.distinct()

    def paginate(self, page, limit):
        total = self.count()
        offset = (page - 1) * limit
        items = list(self.with_relations()[offset:offset + limit]) if offset < total else []
        return PostPage(items=items, total=total, pages=math.ceil(total / limit))


class Post(models.Model):
    """
    Blog post.

    The author is fixed at creation. The slug follows the title, and the
    read time follows the content. An excerpt that was never supplied
    follows the content too.
    """

    WRITABLE_FIELDS = ("title", "content", "excerpt", "category", "published", "featured_image")

    title = models.CharField(max_length=200)
    slug = models.CharField(max_length=220, unique=True, null=True, blank=True)
    content = models.TextField()
    excerpt = models.CharField(max_length=500, blank=True)
    excerpt_is_auto = models.BooleanField(
        default=True,
        help_text="Excerpt is derived from content rather than supplied.",
    )
    featured_image = models.CharField(max_length=500, blank=True)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_posts",
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="posts",
    )
    tags = models.ManyToManyField(Tag, related_name="posts", blank=True)

    published = models.BooleanField(default=False)
    read_time = models.PositiveIntegerField(default=0)

    # Engagement stats
    views = models.PositiveIntegerField(default=0)
    likes = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="liked_blog_posts",
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PostQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["category", "published", "-created_at"],
                name="post_cat_published_idx",
            ),
        ]

    def __str__(self):
        return self.title

    def apply_changes(self, changes):
        """
        Assign writable fields from changes and re-derive dependent fields.

        Keys outside WRITABLE_FIELDS (author, views, slug, ...) are ignored.
        """
        for name in self.WRITABLE_FIELDS:
            if name in changes:
                setattr(self, name, changes[name])

        if "title" in changes:
            self.title = self.title.strip()
            self.slug = slugify(self.title) or None

        if "excerpt" in changes:
            self.excerpt = (self.excerpt or "").strip()
            self.excerpt_is_auto = not self.excerpt

        if "content" in changes:
            self.read_time = read_time(self.content)

        if self.excerpt_is_auto and ("content" in changes or not self.excerpt):
            self.excerpt = derive_excerpt(self.content)

    def ensure_unique(self):
        if self.slug and Post.objects.filter(slug=self.slug).exclude(pk=self.pk).exists():
            raise ConflictError(f"A post with slug '{self.slug}' already exists")

    def can_edit(self, user):
        """Only the author or an admin may change or delete a post."""
        return user.pk == self.author_id or user.is_admin

    def check_editable_by(self, user):
        if not self.can_edit(user):
            raise AuthorizationError("Not authorized to modify this post")

    @transaction.atomic
    def save_with_tags(self, tags=None):
        """Save the post and, when tags is given, replace its tag set."""
        self.ensure_unique()
        self.save()
        if tags is not None:
            self.tags.set(tags)

    def increment_views(self):
        """Increment view count atomically and refresh the local value."""
        Post.objects.filter(pk=self.pk).update(views=F("views") + 1)
        self.refresh_from_db(fields=["views"])

    def toggle_like(self, user):
        """
        Like or unlike the post for user.

        Returns "liked" or "unliked".
        """
        if self.likes.filter(pk=user.pk).exists():
            self.likes.remove(user)
            return "unliked"
        self.likes.add(user)
        return "liked"
