from rest_framework import serializers

from core.cms.lifecycle import ContentStatus
from core.cms.models import (
    Article,
    Branch,
    Category,
    Education,
    Faq,
    FormFile,
    HeroSlide,
    Insurance,
    Media,
    News,
    Service,
    StaticPage,
    Tag,
)

SLUG_PATTERN = r"^[a-z0-9-]+$"


def _slug_field(max_length=200, **kwargs):
    return serializers.RegexField(SLUG_PATTERN, min_length=2, max_length=max_length, **kwargs)


def _media_field():
    return serializers.PrimaryKeyRelatedField(queryset=Media.objects.all(), required=False, allow_null=True)


class RichTextSerializer(serializers.Serializer):
    # editor payload: {"type": "markdown", "content": "..."}
    type = serializers.ChoiceField(choices=["markdown"])
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class GalleryItemSerializer(serializers.Serializer):
    media_id = serializers.UUIDField()
    order = serializers.IntegerField(min_value=0, required=False, default=0)


# ---------------------------------------------------------------------------
# Write (input) serializers. Updates use partial=True.
# ---------------------------------------------------------------------------

class ContentWriteSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ContentStatus.choices, required=False)
    published_at = serializers.DateTimeField(required=False, allow_null=True)


class TaxonomyLinksMixin(serializers.Serializer):
    tag_ids = serializers.ListField(child=serializers.UUIDField(), required=False)
    category_ids = serializers.ListField(child=serializers.UUIDField(), required=False)


class GalleryLinksMixin(serializers.Serializer):
    gallery = GalleryItemSerializer(many=True, required=False)


class ArticleWriteSerializer(TaxonomyLinksMixin, GalleryLinksMixin, ContentWriteSerializer):
    title = serializers.CharField(min_length=2, max_length=120)
    slug = _slug_field()
    excerpt = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=300)
    body = RichTextSerializer()
    reading_minutes = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    cover = _media_field()


class NewsWriteSerializer(TaxonomyLinksMixin, GalleryLinksMixin, ContentWriteSerializer):
    title = serializers.CharField(min_length=2, max_length=120)
    slug = _slug_field()
    excerpt = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=300)
    body = RichTextSerializer()
    cover = _media_field()


class EducationWriteSerializer(NewsWriteSerializer):
    pass


class FaqWriteSerializer(TaxonomyLinksMixin, ContentWriteSerializer):
    question = serializers.CharField(min_length=2, max_length=200)
    slug = _slug_field()
    answer = RichTextSerializer()
    is_pinned = serializers.BooleanField(required=False)
    order = serializers.IntegerField(required=False, min_value=0)


class BranchWriteSerializer(GalleryLinksMixin, ContentWriteSerializer):
    name = serializers.CharField(min_length=2, max_length=120)
    key = _slug_field(max_length=100)
    description = RichTextSerializer(required=False)
    address = serializers.CharField(required=False, allow_blank=True, max_length=300)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    map_url = serializers.URLField(required=False, allow_blank=True, max_length=500)
    working_hours = serializers.CharField(required=False, allow_blank=True, max_length=200)


class ServiceWriteSerializer(GalleryLinksMixin, ContentWriteSerializer):
    title = serializers.CharField(min_length=2, max_length=120)
    slug = _slug_field()
    summary = serializers.CharField(required=False, allow_blank=True, max_length=300)
    body = RichTextSerializer(required=False)
    icon = _media_field()


class InsuranceWriteSerializer(ContentWriteSerializer):
    name = serializers.CharField(min_length=2, max_length=120)
    slug = _slug_field()
    description = RichTextSerializer(required=False)
    website = serializers.URLField(required=False, allow_blank=True, max_length=500)
    logo = _media_field()


class FormFileWriteSerializer(ContentWriteSerializer):
    title = serializers.CharField(min_length=2, max_length=150)
    slug = _slug_field()
    description = RichTextSerializer(required=False)
    file = _media_field()


class HeroSlideWriteSerializer(ContentWriteSerializer):
    title = serializers.CharField(min_length=2, max_length=150)
    key = _slug_field(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, max_length=300)
    call_to_action_text = serializers.CharField(required=False, allow_blank=True, max_length=50)
    call_to_action_url = serializers.CharField(required=False, allow_blank=True, max_length=500)
    image = _media_field()
    order = serializers.IntegerField(required=False)


class StaticPageWriteSerializer(ContentWriteSerializer):
    title = serializers.CharField(min_length=2, max_length=150)
    slug = _slug_field()
    body = RichTextSerializer()
    seo_title = serializers.CharField(required=False, allow_blank=True, max_length=150)
    seo_description = serializers.CharField(required=False, allow_blank=True, max_length=300)


class HeroReorderSerializer(serializers.Serializer):
    ordered_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


# ---------------------------------------------------------------------------
# Read (output) serializers
# ---------------------------------------------------------------------------

BASE_FIELDS = [
    "id",
    "status",
    "published_at",
    "author_id",
    "updated_by_id",
    "created_at",
    "updated_at",
]


class LinksReadMixin:
    def get_tags(self, obj):
        links = obj.tag_links.select_related("tag").order_by("order", "tag__key")
        return [{"id": str(l.tag_id), "key": l.tag.key, "name": l.tag.name, "order": l.order} for l in links]

    def get_categories(self, obj):
        links = obj.category_links.select_related("category").order_by("order", "category__key")
        return [
            {"id": str(l.category_id), "key": l.category.key, "name": l.category.name, "order": l.order}
            for l in links
        ]

    def get_gallery(self, obj):
        links = obj.gallery_links.select_related("media").order_by("order")
        return [
            {"media_id": str(l.media_id), "public_url": l.media.public_url, "alt": l.media.alt, "order": l.order}
            for l in links
        ]


class ArticleSerializer(LinksReadMixin, serializers.ModelSerializer):
    tags = serializers.SerializerMethodField()
    categories = serializers.SerializerMethodField()
    gallery = serializers.SerializerMethodField()

    class Meta:
        model = Article
        fields = BASE_FIELDS + [
            "title", "slug", "excerpt", "body", "reading_minutes", "cover_id",
            "tags", "categories", "gallery",
        ]


class NewsSerializer(LinksReadMixin, serializers.ModelSerializer):
    tags = serializers.SerializerMethodField()
    categories = serializers.SerializerMethodField()
    gallery = serializers.SerializerMethodField()

    class Meta:
        model = News
        fields = BASE_FIELDS + ["title", "slug", "excerpt", "body", "cover_id", "tags", "categories", "gallery"]


class EducationSerializer(NewsSerializer):
    class Meta(NewsSerializer.Meta):
        model = Education


class FaqSerializer(LinksReadMixin, serializers.ModelSerializer):
    tags = serializers.SerializerMethodField()
    categories = serializers.SerializerMethodField()

    class Meta:
        model = Faq
        fields = BASE_FIELDS + ["question", "slug", "answer", "is_pinned", "order", "tags", "categories"]


class BranchSerializer(LinksReadMixin, serializers.ModelSerializer):
    gallery = serializers.SerializerMethodField()

    class Meta:
        model = Branch
        fields = BASE_FIELDS + [
            "name", "key", "description", "address", "phone", "map_url", "working_hours", "gallery",
        ]


class ServiceSerializer(LinksReadMixin, serializers.ModelSerializer):
    gallery = serializers.SerializerMethodField()

    class Meta:
        model = Service
        fields = BASE_FIELDS + ["title", "slug", "summary", "body", "icon_id", "gallery"]


class InsuranceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Insurance
        fields = BASE_FIELDS + ["name", "slug", "description", "website", "logo_id"]


class FormFileSerializer(serializers.ModelSerializer):
    class Meta:
        model = FormFile
        fields = BASE_FIELDS + ["title", "slug", "description", "file_id"]


class HeroSlideSerializer(serializers.ModelSerializer):
    class Meta:
        model = HeroSlide
        fields = BASE_FIELDS + [
            "title", "key", "description", "call_to_action_text", "call_to_action_url", "image_id", "order",
        ]


class StaticPageSerializer(serializers.ModelSerializer):
    class Meta:
        model = StaticPage
        fields = BASE_FIELDS + ["title", "slug", "body", "seo_title", "seo_description"]


# ---------------------------------------------------------------------------
# Taxonomy
# ---------------------------------------------------------------------------

class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ["id", "key", "name", "created_at"]


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "key", "name", "created_at"]


class TaxonomyWriteSerializer(serializers.Serializer):
    key = _slug_field(max_length=50)
    name = serializers.CharField(min_length=2, max_length=80)
