"""
Unauthenticated read endpoints for the public site.

Only visible content is returned: PUBLISHED, or SCHEDULED whose publish
time has passed. Results are cached under the content type's tags and
dropped by the after-commit invalidation of any write to that type; the
TTL bounds how late a scheduled item can appear.
"""
from django.db.models import Q
from django.utils import timezone
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.cms.cache import cached
from core.cms.lifecycle import ContentStatus
from core.cms.registry import ARTICLE, BRANCH, HERO, INSURANCE, PAGE, SERVICE, get_content_type
from core.common.errors import NotFound
from core.common.pagination import page_params, paginate

HOME_SECTIONS = (
    # (response key, content type, cache tag, limit)
    ("hero", HERO, "home-hero", 10),
    ("articles", ARTICLE, "home-articles", 6),
    ("services", SERVICE, "home-services", 8),
    ("branches", BRANCH, "home-branches", 20),
    ("insurances", INSURANCE, "home-insurances", 30),
    ("pages", PAGE, "home-static-pages", 10),
)


def visible(qs, now=None):
    now = now or timezone.now()
    return qs.filter(
        Q(status=ContentStatus.PUBLISHED) | Q(status=ContentStatus.SCHEDULED),
        published_at__lte=now,
    )


def _public_type(type_key):
    ctype = get_content_type(type_key)
    if ctype is None:
        raise NotFound("Unknown content type")
    return ctype


class PublicView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]


class PublicContentListView(PublicView):
    def get(self, request, type_key: str):
        ctype = _public_type(type_key)
        page, page_size = page_params(request)

        def load():
            qs = visible(ctype.model.objects.all()).order_by(*ctype.public_ordering)
            items, meta = paginate(qs, page, page_size)
            return {"items": ctype.read_serializer(items, many=True).data, **meta}

        return Response(cached(ctype.primary_tag, f"list:{page}:{page_size}", load))


class PublicContentDetailView(PublicView):
    def get(self, request, type_key: str, slug: str):
        ctype = _public_type(type_key)

        def load():
            entity = visible(ctype.model.objects.filter(**{ctype.slug_field: slug})).first()
            return {"item": ctype.read_serializer(entity).data} if entity else None

        data = cached(ctype.primary_tag, f"detail:{slug}", load)
        if data is None:
            raise NotFound(f"{ctype.label} not found")
        return Response(data)


class PublicHomeView(PublicView):
    def get(self, request):
        out = {}
        for name, ctype, tag, limit in HOME_SECTIONS:
            def load(ctype=ctype, limit=limit):
                qs = visible(ctype.model.objects.all()).order_by(*ctype.public_ordering)[:limit]
                return ctype.read_serializer(qs, many=True).data

            out[name] = cached(tag, "home", load)
        return Response(out)
