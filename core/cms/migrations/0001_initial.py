import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

from core.cms.migrations._fields import content_fields, link_fields, media_fk


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Tag",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("key", models.CharField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=80)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={"db_table": "cms_tags"},
        ),
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("key", models.CharField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=80)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={"db_table": "cms_categories", "verbose_name_plural": "categories"},
        ),
        migrations.CreateModel(
            name="Media",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("public_url", models.URLField(max_length=1000)),
                ("alt", models.CharField(blank=True, default="", max_length=200)),
                ("mime_type", models.CharField(blank=True, default="", max_length=100)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "uploaded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={"db_table": "cms_media", "verbose_name_plural": "media"},
        ),
        migrations.CreateModel(
            name="Article",
            fields=content_fields() + [
                ("title", models.CharField(max_length=120)),
                ("slug", models.SlugField(max_length=200, unique=True)),
                ("excerpt", models.CharField(blank=True, default="", max_length=300)),
                ("body", models.JSONField(blank=True, default=dict)),
                ("reading_minutes", models.PositiveIntegerField(blank=True, null=True)),
                ("cover", media_fk()),
            ],
            options={"db_table": "cms_articles"},
        ),
        migrations.CreateModel(
            name="ArticleTag",
            fields=link_fields("article", "cms.article", "tag", "cms.tag", "tag_links"),
            options={"db_table": "cms_article_tags"},
        ),
        migrations.CreateModel(
            name="ArticleCategory",
            fields=link_fields("article", "cms.article", "category", "cms.category", "category_links"),
            options={"db_table": "cms_article_categories"},
        ),
        migrations.CreateModel(
            name="ArticleMedia",
            fields=link_fields("article", "cms.article", "media", "cms.media", "gallery_links"),
            options={"db_table": "cms_article_media"},
        ),
        migrations.CreateModel(
            name="Faq",
            fields=content_fields() + [
                ("question", models.CharField(max_length=200)),
                ("slug", models.SlugField(max_length=200, unique=True)),
                ("answer", models.JSONField(blank=True, default=dict)),
                ("is_pinned", models.BooleanField(default=False)),
                ("order", models.PositiveIntegerField(default=0)),
            ],
            options={"db_table": "cms_faqs"},
        ),
        migrations.CreateModel(
            name="FaqTag",
            fields=link_fields("faq", "cms.faq", "tag", "cms.tag", "tag_links"),
            options={"db_table": "cms_faq_tags"},
        ),
        migrations.CreateModel(
            name="FaqCategory",
            fields=link_fields("faq", "cms.faq", "category", "cms.category", "category_links"),
            options={"db_table": "cms_faq_categories"},
        ),
        migrations.CreateModel(
            name="Branch",
            fields=content_fields() + [
                ("name", models.CharField(max_length=120)),
                ("key", models.SlugField(max_length=100, unique=True)),
                ("description", models.JSONField(blank=True, default=dict)),
                ("address", models.CharField(blank=True, default="", max_length=300)),
                ("phone", models.CharField(blank=True, default="", max_length=32)),
                ("map_url", models.URLField(blank=True, default="", max_length=500)),
                ("working_hours", models.CharField(blank=True, default="", max_length=200)),
            ],
            options={"db_table": "cms_branches", "verbose_name_plural": "branches"},
        ),
        migrations.CreateModel(
            name="BranchMedia",
            fields=link_fields("branch", "cms.branch", "media", "cms.media", "gallery_links"),
            options={"db_table": "cms_branch_media"},
        ),
        migrations.CreateModel(
            name="Service",
            fields=content_fields() + [
                ("title", models.CharField(max_length=120)),
                ("slug", models.SlugField(max_length=200, unique=True)),
                ("summary", models.CharField(blank=True, default="", max_length=300)),
                ("body", models.JSONField(blank=True, default=dict)),
                ("icon", media_fk()),
            ],
            options={"db_table": "cms_services"},
        ),
        migrations.CreateModel(
            name="ServiceMedia",
            fields=link_fields("service", "cms.service", "media", "cms.media", "gallery_links"),
            options={"db_table": "cms_service_media"},
        ),
        migrations.CreateModel(
            name="Insurance",
            fields=content_fields() + [
                ("name", models.CharField(max_length=120)),
                ("slug", models.SlugField(max_length=200, unique=True)),
                ("description", models.JSONField(blank=True, default=dict)),
                ("website", models.URLField(blank=True, default="", max_length=500)),
                ("logo", media_fk()),
            ],
            options={"db_table": "cms_insurances"},
        ),
        migrations.CreateModel(
            name="FormFile",
            fields=content_fields() + [
                ("title", models.CharField(max_length=150)),
                ("slug", models.SlugField(max_length=200, unique=True)),
                ("description", models.JSONField(blank=True, default=dict)),
                ("file", media_fk()),
            ],
            options={"db_table": "cms_forms"},
        ),
        migrations.CreateModel(
            name="HeroSlide",
            fields=content_fields() + [
                ("title", models.CharField(max_length=150)),
                ("key", models.SlugField(max_length=100, unique=True)),
                ("description", models.CharField(blank=True, default="", max_length=300)),
                ("call_to_action_text", models.CharField(blank=True, default="", max_length=50)),
                ("call_to_action_url", models.CharField(blank=True, default="", max_length=500)),
                ("order", models.IntegerField(default=0)),
                ("image", media_fk()),
            ],
            options={"db_table": "cms_hero_slides"},
        ),
        migrations.CreateModel(
            name="StaticPage",
            fields=content_fields() + [
                ("title", models.CharField(max_length=150)),
                ("slug", models.SlugField(max_length=200, unique=True)),
                ("body", models.JSONField(blank=True, default=dict)),
                ("seo_title", models.CharField(blank=True, default="", max_length=150)),
                ("seo_description", models.CharField(blank=True, default="", max_length=300)),
            ],
            options={"db_table": "cms_static_pages"},
        ),
        migrations.AddConstraint(
            model_name="articletag",
            constraint=models.UniqueConstraint(fields=("article", "tag"), name="uq_article_tag"),
        ),
        migrations.AddConstraint(
            model_name="articlecategory",
            constraint=models.UniqueConstraint(fields=("article", "category"), name="uq_article_category"),
        ),
        migrations.AddConstraint(
            model_name="articlemedia",
            constraint=models.UniqueConstraint(fields=("article", "media"), name="uq_article_media"),
        ),
        migrations.AddConstraint(
            model_name="faqtag",
            constraint=models.UniqueConstraint(fields=("faq", "tag"), name="uq_faq_tag"),
        ),
        migrations.AddConstraint(
            model_name="faqcategory",
            constraint=models.UniqueConstraint(fields=("faq", "category"), name="uq_faq_category"),
        ),
        migrations.AddConstraint(
            model_name="branchmedia",
            constraint=models.UniqueConstraint(fields=("branch", "media"), name="uq_branch_media"),
        ),
        migrations.AddConstraint(
            model_name="servicemedia",
            constraint=models.UniqueConstraint(fields=("service", "media"), name="uq_service_media"),
        ),
    ]
