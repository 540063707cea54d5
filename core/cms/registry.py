"""
Content type descriptors.

Every concrete type is described by data: its model, slug field, rich-text
fields, association tables, audit prefix and cache tags. The coordinator and
the generic views read these descriptors; no type gets its own lifecycle code.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from django.core.exceptions import ImproperlyConfigured

from core.cms import models as m
from core.cms import serializers as s
from core.iam import rbac


@dataclass(frozen=True)
class Association:
    name: str            # payload key: "tag_ids", "category_ids", "gallery"
    through: type
    owner_field: str     # FK on the through model pointing at the entity
    target_field: str    # FK on the through model pointing at the linked row
    target: type
    links: str           # related_name on the entity

    def items_from_payload(self, raw) -> list[tuple[object, int]]:
        """
        -> [(target_id, order)], de-duplicated, first occurrence wins.
        Plain id lists are ordered by position; gallery items carry their order.
        """
        seen = set()
        out = []
        for idx, item in enumerate(raw or []):
            if isinstance(item, dict):
                target_id, order = item["media_id"], item.get("order", 0)
            else:
                target_id, order = item, idx
            if target_id in seen:
                continue
            seen.add(target_id)
            out.append((target_id, order))
        return out


@dataclass(frozen=True)
class ContentType:
    key: str
    label: str
    model: type
    audit_prefix: str
    title_field: str
    write_serializer: type
    read_serializer: type
    slug_field: str = "slug"
    body_fields: tuple = ()
    associations: tuple = ()
    cache_tags: tuple = ()
    search_fields: tuple = ()
    ordering: tuple = ("-created_at",)
    public_ordering: tuple = ("-published_at", "-created_at")
    scalar_fields: tuple = field(default=())

    def permission(self, action: str) -> str:
        return rbac.content_permission(self.key, action)

    def action(self, verb: str) -> str:
        return f"{self.audit_prefix}_{verb}"

    @property
    def primary_tag(self) -> str:
        return self.cache_tags[0]


def _tags(through, owner):
    return Association("tag_ids", through, owner, "tag", m.Tag, "tag_links")


def _categories(through, owner):
    return Association("category_ids", through, owner, "category", m.Category, "category_links")


def _gallery(through, owner):
    return Association("gallery", through, owner, "media", m.Media, "gallery_links")


ARTICLE = ContentType(
    key="article",
    label="Article",
    model=m.Article,
    audit_prefix="CMS_ARTICLE",
    title_field="title",
    write_serializer=s.ArticleWriteSerializer,
    read_serializer=s.ArticleSerializer,
    body_fields=("body",),
    associations=(
        _tags(m.ArticleTag, "article"),
        _categories(m.ArticleCategory, "article"),
        _gallery(m.ArticleMedia, "article"),
    ),
    cache_tags=("articles", "home-articles"),
    search_fields=("title", "slug"),
    scalar_fields=("title", "slug", "excerpt", "body", "reading_minutes", "cover"),
)

NEWS = ContentType(
    key="news",
    label="News",
    model=m.News,
    audit_prefix="CMS_NEWS",
    title_field="title",
    write_serializer=s.NewsWriteSerializer,
    read_serializer=s.NewsSerializer,
    body_fields=("body",),
    associations=(
        _tags(m.NewsTag, "news"),
        _categories(m.NewsCategory, "news"),
        _gallery(m.NewsMedia, "news"),
    ),
    cache_tags=("news",),
    search_fields=("title", "slug"),
    scalar_fields=("title", "slug", "excerpt", "body", "cover"),
)

EDUCATION = ContentType(
    key="education",
    label="Education",
    model=m.Education,
    audit_prefix="CMS_EDU",
    title_field="title",
    write_serializer=s.EducationWriteSerializer,
    read_serializer=s.EducationSerializer,
    body_fields=("body",),
    associations=(
        _tags(m.EducationTag, "education"),
        _categories(m.EducationCategory, "education"),
        _gallery(m.EducationMedia, "education"),
    ),
    cache_tags=("education",),
    search_fields=("title", "slug"),
    scalar_fields=("title", "slug", "excerpt", "body", "cover"),
)

FAQ = ContentType(
    key="faq",
    label="FAQ",
    model=m.Faq,
    audit_prefix="CMS_FAQ",
    title_field="question",
    write_serializer=s.FaqWriteSerializer,
    read_serializer=s.FaqSerializer,
    body_fields=("answer",),
    associations=(
        _tags(m.FaqTag, "faq"),
        _categories(m.FaqCategory, "faq"),
    ),
    cache_tags=("faq",),
    search_fields=("question", "slug"),
    ordering=("-is_pinned", "order", "-created_at"),
    public_ordering=("-is_pinned", "order", "-created_at"),
    scalar_fields=("question", "slug", "answer", "is_pinned", "order"),
)

BRANCH = ContentType(
    key="branch",
    label="Branch",
    model=m.Branch,
    audit_prefix="CMS_BRANCH",
    title_field="name",
    slug_field="key",
    write_serializer=s.BranchWriteSerializer,
    read_serializer=s.BranchSerializer,
    body_fields=("description",),
    associations=(_gallery(m.BranchMedia, "branch"),),
    cache_tags=("branches", "home-branches", "branch-cms"),
    search_fields=("name", "key", "address"),
    ordering=("name",),
    public_ordering=("name",),
    scalar_fields=("name", "key", "description", "address", "phone", "map_url", "working_hours"),
)

SERVICE = ContentType(
    key="service",
    label="Service",
    model=m.Service,
    audit_prefix="CMS_SERVICE",
    title_field="title",
    write_serializer=s.ServiceWriteSerializer,
    read_serializer=s.ServiceSerializer,
    body_fields=("body",),
    associations=(_gallery(m.ServiceMedia, "service"),),
    cache_tags=("services", "home-services"),
    search_fields=("title", "slug"),
    scalar_fields=("title", "slug", "summary", "body", "icon"),
)

INSURANCE = ContentType(
    key="insurance",
    label="Insurance",
    model=m.Insurance,
    audit_prefix="CMS_INSURANCE",
    title_field="name",
    write_serializer=s.InsuranceWriteSerializer,
    read_serializer=s.InsuranceSerializer,
    body_fields=("description",),
    cache_tags=("insurances", "home-insurances"),
    search_fields=("name", "slug"),
    ordering=("name",),
    public_ordering=("name",),
    scalar_fields=("name", "slug", "description", "website", "logo"),
)

FORM = ContentType(
    key="form",
    label="Form",
    model=m.FormFile,
    audit_prefix="CMS_FORM",
    title_field="title",
    write_serializer=s.FormFileWriteSerializer,
    read_serializer=s.FormFileSerializer,
    body_fields=("description",),
    cache_tags=("forms",),
    search_fields=("title", "slug"),
    scalar_fields=("title", "slug", "description", "file"),
)

HERO = ContentType(
    key="hero",
    label="Hero slide",
    model=m.HeroSlide,
    audit_prefix="CMS_HERO_SLIDE",
    title_field="title",
    slug_field="key",
    write_serializer=s.HeroSlideWriteSerializer,
    read_serializer=s.HeroSlideSerializer,
    cache_tags=("home-hero",),
    search_fields=("title", "key"),
    ordering=("order", "-created_at"),
    public_ordering=("order", "-created_at"),
    scalar_fields=("title", "key", "description", "call_to_action_text", "call_to_action_url", "image", "order"),
)

PAGE = ContentType(
    key="page",
    label="Static page",
    model=m.StaticPage,
    audit_prefix="CMS_STATIC_PAGE",
    title_field="title",
    write_serializer=s.StaticPageWriteSerializer,
    read_serializer=s.StaticPageSerializer,
    body_fields=("body",),
    cache_tags=("static-pages", "home-static-pages"),
    search_fields=("title", "slug"),
    scalar_fields=("title", "slug", "body", "seo_title", "seo_description"),
)

CONTENT_TYPES = {
    ct.key: ct for ct in (ARTICLE, NEWS, EDUCATION, FAQ, BRANCH, SERVICE, INSURANCE, FORM, HERO, PAGE)
}


def check_permission_table(registered=None, permitted=None) -> None:
    registered = set(CONTENT_TYPES if registered is None else registered)
    permitted = set(rbac.CONTENT_TYPES if permitted is None else permitted)
    if registered != permitted:
        raise ImproperlyConfigured(
            "Content registry and permission table disagree: "
            f"unregistered={sorted(permitted - registered)} unpermitted={sorted(registered - permitted)}"
        )


check_permission_table()


def get_content_type(key: str) -> ContentType | None:
    return CONTENT_TYPES.get(key)
