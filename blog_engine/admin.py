"""
Django admin configuration for blog_engine.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Category, Post, Tag, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ["username", "email", "role", "is_active", "date_joined"]
    list_filter = ["role", "is_active"]
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Blog", {"fields": ("role", "profile")}),
    )


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "post_count", "created_by", "created_at"]
    search_fields = ["name", "slug", "description"]
    readonly_fields = ["slug", "created_at", "updated_at"]

    def post_count(self, obj):
        return obj.posts.count()

    def save_model(self, request, obj, form, change):
        obj.apply_changes(form.cleaned_data)
        if not change:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "created_at"]
    search_fields = ["name", "slug"]
    readonly_fields = ["slug", "created_at"]

    def save_model(self, request, obj, form, change):
        obj.apply_changes(form.cleaned_data)
        super().save_model(request, obj, form, change)


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = [
        "title_preview",
        "author",
        "category",
        "published",
        "views",
        "read_time",
        "created_at",
    ]
    list_filter = ["published", "category", "created_at"]
    search_fields = ["title", "content", "author__username"]
    raw_id_fields = ["author", "category"]
    filter_horizontal = ["tags"]
    date_hierarchy = "created_at"
    readonly_fields = ["slug", "read_time", "views", "created_at", "updated_at"]

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "content", "excerpt", "featured_image", "author")
        }),
        ("Taxonomy", {
            "fields": ("category", "tags")
        }),
        ("Status", {
            "fields": ("published",)
        }),
        ("Metadata", {
            "fields": ("read_time", "views", "created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["publish_posts", "unpublish_posts"]

    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    title_preview.short_description = "Title"

    def save_model(self, request, obj, form, change):
        changes = {name: form.cleaned_data[name] for name in form.changed_data
                   if name in Post.WRITABLE_FIELDS}
        obj.apply_changes(changes)
        super().save_model(request, obj, form, change)

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        updated = queryset.update(published=True)
        self.message_user(request, f"{updated} post(s) published.")

    @admin.action(description="Unpublish selected posts")
    def unpublish_posts(self, request, queryset):
        updated = queryset.update(published=False)
        self.message_user(request, f"{updated} post(s) unpublished.")
