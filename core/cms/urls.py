from django.urls import path

from core.cms.api import (
    categories_detail,
    categories_list,
    cms_stats,
    content_detail,
    content_list,
    hero_reorder,
    slug_check,
    tags_detail,
    tags_list,
)
from core.cms.public import PublicContentDetailView, PublicContentListView, PublicHomeView

urlpatterns = [
    # taxonomy, hero and stats routes come before the generic <type_key> ones
    path("cms/stats", cms_stats, name="cms-stats"),
    path("cms/tags", tags_list, name="cms-tags-list"),
    path("cms/tags/<uuid:tag_id>", tags_detail, name="cms-tags-detail"),
    path("cms/categories", categories_list, name="cms-categories-list"),
    path("cms/categories/<uuid:category_id>", categories_detail, name="cms-categories-detail"),
    path("cms/hero/reorder", hero_reorder, name="cms-hero-reorder"),

    path("cms/<str:type_key>", content_list, name="cms-content-list"),
    path("cms/<str:type_key>/slug-check", slug_check, name="cms-slug-check"),
    path("cms/<str:type_key>/<uuid:entity_id>", content_detail, name="cms-content-detail"),

    path("public/home", PublicHomeView.as_view(), name="public-home"),
    path("public/<str:type_key>", PublicContentListView.as_view(), name="public-content-list"),
    path("public/<str:type_key>/<str:slug>", PublicContentDetailView.as_view(), name="public-content-detail"),
]
