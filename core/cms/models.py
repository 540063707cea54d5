import uuid
from django.conf import settings
from django.db import models
from django.utils import timezone

from core.cms.lifecycle import ContentStatus


# ---------------------------------------------------------------------------
# Taxonomy & media
# ---------------------------------------------------------------------------

class Tag(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=80)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "cms_tags"

    def __str__(self) -> str:
        return self.key


class Category(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=80)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "cms_categories"
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.key


class Media(models.Model):
    """
    Reference to an already-uploaded file. Upload mechanics live elsewhere.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    public_url = models.URLField(max_length=1000)
    alt = models.CharField(max_length=200, blank=True, default="")
    mime_type = models.CharField(max_length=100, blank=True, default="")
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "cms_media"
        verbose_name_plural = "media"


# ---------------------------------------------------------------------------
# Shared content shape
# ---------------------------------------------------------------------------

class ContentEntity(models.Model):
    """
    Fields every content type carries. Status and published_at are only
    written through core.cms.coordinator (which runs lifecycle.transition).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    status = models.CharField(
        max_length=16, choices=ContentStatus.choices, default=ContentStatus.DRAFT, db_index=True
    )
    published_at = models.DateTimeField(null=True, blank=True, db_index=True)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        abstract = True


class OrderedLink(models.Model):
    order = models.PositiveIntegerField(default=0)

    class Meta:
        abstract = True


# ---------------------------------------------------------------------------
# Concrete content types
# ---------------------------------------------------------------------------

class Article(ContentEntity):
    title = models.CharField(max_length=120)
    slug = models.SlugField(max_length=200, unique=True)
    excerpt = models.CharField(max_length=300, blank=True, default="")
    body = models.JSONField(default=dict, blank=True)
    reading_minutes = models.PositiveIntegerField(null=True, blank=True)
    cover = models.ForeignKey(Media, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")

    class Meta:
        db_table = "cms_articles"


class ArticleTag(OrderedLink):
    article = models.ForeignKey(Article, on_delete=models.CASCADE, related_name="tag_links")
    tag = models.ForeignKey(Tag, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_article_tags"
        constraints = [models.UniqueConstraint(fields=["article", "tag"], name="uq_article_tag")]


class ArticleCategory(OrderedLink):
    article = models.ForeignKey(Article, on_delete=models.CASCADE, related_name="category_links")
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_article_categories"
        constraints = [models.UniqueConstraint(fields=["article", "category"], name="uq_article_category")]


class ArticleMedia(OrderedLink):
    article = models.ForeignKey(Article, on_delete=models.CASCADE, related_name="gallery_links")
    media = models.ForeignKey(Media, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_article_media"
        constraints = [models.UniqueConstraint(fields=["article", "media"], name="uq_article_media")]


class News(ContentEntity):
    title = models.CharField(max_length=120)
    slug = models.SlugField(max_length=200, unique=True)
    excerpt = models.CharField(max_length=300, blank=True, default="")
    body = models.JSONField(default=dict, blank=True)
    cover = models.ForeignKey(Media, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")

    class Meta:
        db_table = "cms_news"
        verbose_name_plural = "news"


class NewsTag(OrderedLink):
    news = models.ForeignKey(News, on_delete=models.CASCADE, related_name="tag_links")
    tag = models.ForeignKey(Tag, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_news_tags"
        constraints = [models.UniqueConstraint(fields=["news", "tag"], name="uq_news_tag")]


class NewsCategory(OrderedLink):
    news = models.ForeignKey(News, on_delete=models.CASCADE, related_name="category_links")
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_news_categories"
        constraints = [models.UniqueConstraint(fields=["news", "category"], name="uq_news_category")]


class NewsMedia(OrderedLink):
    news = models.ForeignKey(News, on_delete=models.CASCADE, related_name="gallery_links")
    media = models.ForeignKey(Media, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_news_media"
        constraints = [models.UniqueConstraint(fields=["news", "media"], name="uq_news_media")]


class Education(ContentEntity):
    """Patient education material."""
    title = models.CharField(max_length=120)
    slug = models.SlugField(max_length=200, unique=True)
    excerpt = models.CharField(max_length=300, blank=True, default="")
    body = models.JSONField(default=dict, blank=True)
    cover = models.ForeignKey(Media, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")

    class Meta:
        db_table = "cms_education"
        verbose_name_plural = "education"


class EducationTag(OrderedLink):
    education = models.ForeignKey(Education, on_delete=models.CASCADE, related_name="tag_links")
    tag = models.ForeignKey(Tag, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_education_tags"
        constraints = [models.UniqueConstraint(fields=["education", "tag"], name="uq_education_tag")]


class EducationCategory(OrderedLink):
    education = models.ForeignKey(Education, on_delete=models.CASCADE, related_name="category_links")
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_education_categories"
        constraints = [models.UniqueConstraint(fields=["education", "category"], name="uq_education_category")]


class EducationMedia(OrderedLink):
    education = models.ForeignKey(Education, on_delete=models.CASCADE, related_name="gallery_links")
    media = models.ForeignKey(Media, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_education_media"
        constraints = [models.UniqueConstraint(fields=["education", "media"], name="uq_education_media")]


class Faq(ContentEntity):
    question = models.CharField(max_length=200)
    slug = models.SlugField(max_length=200, unique=True)
    answer = models.JSONField(default=dict, blank=True)
    is_pinned = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "cms_faqs"


class FaqTag(OrderedLink):
    faq = models.ForeignKey(Faq, on_delete=models.CASCADE, related_name="tag_links")
    tag = models.ForeignKey(Tag, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_faq_tags"
        constraints = [models.UniqueConstraint(fields=["faq", "tag"], name="uq_faq_tag")]


class FaqCategory(OrderedLink):
    faq = models.ForeignKey(Faq, on_delete=models.CASCADE, related_name="category_links")
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_faq_categories"
        constraints = [models.UniqueConstraint(fields=["faq", "category"], name="uq_faq_category")]


class Branch(ContentEntity):
    name = models.CharField(max_length=120)
    key = models.SlugField(max_length=100, unique=True)
    description = models.JSONField(default=dict, blank=True)
    address = models.CharField(max_length=300, blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")
    map_url = models.URLField(max_length=500, blank=True, default="")
    working_hours = models.CharField(max_length=200, blank=True, default="")

    class Meta:
        db_table = "cms_branches"
        verbose_name_plural = "branches"


class BranchMedia(OrderedLink):
    branch = models.ForeignKey(Branch, on_delete=models.CASCADE, related_name="gallery_links")
    media = models.ForeignKey(Media, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_branch_media"
        constraints = [models.UniqueConstraint(fields=["branch", "media"], name="uq_branch_media")]


class Service(ContentEntity):
    title = models.CharField(max_length=120)
    slug = models.SlugField(max_length=200, unique=True)
    summary = models.CharField(max_length=300, blank=True, default="")
    body = models.JSONField(default=dict, blank=True)
    icon = models.ForeignKey(Media, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")

    class Meta:
        db_table = "cms_services"


class ServiceMedia(OrderedLink):
    service = models.ForeignKey(Service, on_delete=models.CASCADE, related_name="gallery_links")
    media = models.ForeignKey(Media, on_delete=models.CASCADE, related_name="+")

    class Meta:
        db_table = "cms_service_media"
        constraints = [models.UniqueConstraint(fields=["service", "media"], name="uq_service_media")]


class Insurance(ContentEntity):
    name = models.CharField(max_length=120)
    slug = models.SlugField(max_length=200, unique=True)
    description = models.JSONField(default=dict, blank=True)
    website = models.URLField(max_length=500, blank=True, default="")
    logo = models.ForeignKey(Media, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")

    class Meta:
        db_table = "cms_insurances"


class FormFile(ContentEntity):
    title = models.CharField(max_length=150)
    slug = models.SlugField(max_length=200, unique=True)
    description = models.JSONField(default=dict, blank=True)
    file = models.ForeignKey(Media, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")

    class Meta:
        db_table = "cms_forms"


class HeroSlide(ContentEntity):
    title = models.CharField(max_length=150)
    key = models.SlugField(max_length=100, unique=True)
    description = models.CharField(max_length=300, blank=True, default="")
    call_to_action_text = models.CharField(max_length=50, blank=True, default="")
    call_to_action_url = models.CharField(max_length=500, blank=True, default="")
    image = models.ForeignKey(Media, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    order = models.IntegerField(default=0)

    class Meta:
        db_table = "cms_hero_slides"


class StaticPage(ContentEntity):
    title = models.CharField(max_length=150)
    slug = models.SlugField(max_length=200, unique=True)
    body = models.JSONField(default=dict, blank=True)
    seo_title = models.CharField(max_length=150, blank=True, default="")
    seo_description = models.CharField(max_length=300, blank=True, default="")

    class Meta:
        db_table = "cms_static_pages"
