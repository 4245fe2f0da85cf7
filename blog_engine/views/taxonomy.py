"""
Category and tag endpoints. Reads are public; writes need the admin role.
"""
import logging

from ..exceptions import NotFoundError
from ..models import Category, Tag
from ..serializers import serialize_category, serialize_tag
from ..validation import CategoryForm, TagForm, validate
from .base import ApiView, json_body, respond

logger = logging.getLogger(__name__)


class TaxonomyMixin:
    model = None
    form_class = None
    serializer = None

    def get_object(self, pk):
        try:
            return self.model.objects.get(pk=pk)
        except self.model.DoesNotExist:
            raise NotFoundError(f"{self.model.__name__} not found") from None

    def store(self, obj, body):
        obj.apply_changes(body)
        obj.ensure_unique()
        obj.save()
        return obj


class TaxonomyListView(TaxonomyMixin, ApiView):
    admin_required_methods = ("post",)

    def get(self, request):
        data = [self.serializer(obj) for obj in self.model.objects.all()]
        return respond(data, count=len(data))

    def post(self, request):
        body = validate(json_body(request), self.form_class)
        obj = self.store(self.build(request), body)
        logger.info("%s %s created by %s", self.model.__name__, obj.pk, request.user.username)
        return respond(self.serializer(obj), status=201)

    def build(self, request):
        return self.model()


class TaxonomyDetailView(TaxonomyMixin, ApiView):
    admin_required_methods = ("put", "delete")

    def get(self, request, pk):
        return respond(self.serializer(self.get_object(pk)))

    def put(self, request, pk):
        body = validate(json_body(request), self.form_class, partial=True)
        obj = self.store(self.get_object(pk), body)
        return respond(self.serializer(obj))

    def delete(self, request, pk):
        obj = self.get_object(pk)
        self.destroy(obj)
        logger.info("%s %s deleted by %s", self.model.__name__, pk, request.user.username)
        return respond({})

    def destroy(self, obj):
        obj.delete()


class CategoryListView(TaxonomyListView):
    model = Category
    form_class = CategoryForm
    serializer = staticmethod(serialize_category)

    def build(self, request):
        return Category(created_by=request.user)


class CategoryDetailView(TaxonomyDetailView):
    model = Category
    form_class = CategoryForm
    serializer = staticmethod(serialize_category)

    def destroy(self, obj):
        obj.delete_checked()


class TagListView(TaxonomyListView):
    model = Tag
    form_class = TagForm
    serializer = staticmethod(serialize_tag)


class TagDetailView(TaxonomyDetailView):
    model = Tag
    form_class = TagForm
    serializer = staticmethod(serialize_tag)
