"""
Post endpoints.
"""
import logging

from ..exceptions import NotFoundError
from ..models import Category, Post
from ..serializers import serialize_post
from ..validation import PostForm, parse_listing_params, validate
from .base import ApiView, json_body, respond

logger = logging.getLogger(__name__)

# API field name -> Post field name
POST_FIELDS = {
    "title": "title",
    "content": "content",
    "excerpt": "excerpt",
    "category": "category",
    "published": "published",
    "featuredImage": "featured_image",
}


def get_post(pk):
    try:
        return Post.objects.with_relations().get(pk=pk)
    except Post.DoesNotExist:
        raise NotFoundError("Post not found") from None


def post_changes(body):
    """Translate cleaned form data into Post.apply_changes() input."""
    changes = {model: body[api] for api, model in POST_FIELDS.items() if api in body}
    if changes.get("published") is None:
        changes.pop("published", None)
    return changes


def page_response(posts, **extra):
    data = [serialize_post(post) for post in posts]
    return respond(data, count=len(data), **extra)


class PostListView(ApiView):
    """List posts with filters and pagination, or create a post."""

    login_required_methods = ("post",)

    def get(self, request):
        page, limit, filters = parse_listing_params(request.GET)
        result = Post.objects.listing(**filters).paginate(page, limit)
        return page_response(result.items, total=result.total, pages=result.pages)

    def post(self, request):
        body = validate(json_body(request), PostForm)
        changes = post_changes(body)
        tags = body.get("tags")

        post = Post(author=request.user)
        post.apply_changes(changes)
        post.save_with_tags(tags)
        logger.info("Post %s created by %s", post.pk, request.user.username)
        return respond(serialize_post(get_post(post.pk)), status=201)


class PostDetailView(ApiView):
    """Read (counting a view), update or delete a single post."""

    login_required_methods = ("put", "delete")

    def get(self, request, pk):
        post = get_post(pk)
        post.increment_views()
        return respond(serialize_post(post))

    def put(self, request, pk):
        body = validate(json_body(request), PostForm, partial=True)
        post = get_post(pk)
        post.check_editable_by(request.user)

        changes = post_changes(body)
        tags = body.get("tags")
        post.apply_changes(changes)
        post.save_with_tags(tags)
        logger.info("Post %s updated by %s", post.pk, request.user.username)
        return respond(serialize_post(get_post(post.pk)))

    def delete(self, request, pk):
        post = get_post(pk)
        post.check_editable_by(request.user)
        post.delete()
        logger.info("Post %s deleted by %s", pk, request.user.username)
        return respond({})


class PostLikeView(ApiView):
    """Toggle the current user's like on a post."""

    login_required_methods = ("put",)

    def put(self, request, pk):
        post = get_post(pk)
        action = post.toggle_like(request.user)
        return respond(serialize_post(post), action=action)


class CategoryPostListView(ApiView):
    """Published posts in one category, newest first."""

    def get(self, request, pk):
        if not Category.objects.filter(pk=pk).exists():
            raise NotFoundError("Category not found")
        posts = Post.objects.published().filter(category_id=pk).with_relations()
        return page_response(posts)
