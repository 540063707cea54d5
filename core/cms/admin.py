from django.contrib import admin

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


@admin.register(Tag, Category)
class TaxonomyAdmin(admin.ModelAdmin):
    list_display = ("key", "name", "created_at")
    search_fields = ("key", "name")


@admin.register(Media)
class MediaAdmin(admin.ModelAdmin):
    list_display = ("id", "public_url", "mime_type", "created_at")
    search_fields = ("public_url", "alt")


# Status and publish time are read-only here: they only change through the
# API so that every transition is validated, audited and invalidates caches.
@admin.register(Article, News, Education, Faq, Branch, Service, Insurance, FormFile, HeroSlide, StaticPage)
class ContentAdmin(admin.ModelAdmin):
    list_display = ("id", "__str__", "status", "published_at", "updated_at")
    list_filter = ("status",)
    readonly_fields = ("status", "published_at", "author", "updated_by", "created_at", "updated_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
