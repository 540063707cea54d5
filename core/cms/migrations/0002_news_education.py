from django.db import migrations, models

from core.cms.migrations._fields import content_fields, link_fields, media_fk


def post_fields():
    return content_fields() + [
        ("title", models.CharField(max_length=120)),
        ("slug", models.SlugField(max_length=200, unique=True)),
        ("excerpt", models.CharField(blank=True, default="", max_length=300)),
        ("body", models.JSONField(blank=True, default=dict)),
        ("cover", media_fk()),
    ]


class Migration(migrations.Migration):

    dependencies = [
        ("cms", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="News",
            fields=post_fields(),
            options={"db_table": "cms_news", "verbose_name_plural": "news"},
        ),
        migrations.CreateModel(
            name="NewsTag",
            fields=link_fields("news", "cms.news", "tag", "cms.tag", "tag_links"),
            options={"db_table": "cms_news_tags"},
        ),
        migrations.CreateModel(
            name="NewsCategory",
            fields=link_fields("news", "cms.news", "category", "cms.category", "category_links"),
            options={"db_table": "cms_news_categories"},
        ),
        migrations.CreateModel(
            name="NewsMedia",
            fields=link_fields("news", "cms.news", "media", "cms.media", "gallery_links"),
            options={"db_table": "cms_news_media"},
        ),
        migrations.CreateModel(
            name="Education",
            fields=post_fields(),
            options={"db_table": "cms_education", "verbose_name_plural": "education"},
        ),
        migrations.CreateModel(
            name="EducationTag",
            fields=link_fields("education", "cms.education", "tag", "cms.tag", "tag_links"),
            options={"db_table": "cms_education_tags"},
        ),
        migrations.CreateModel(
            name="EducationCategory",
            fields=link_fields("education", "cms.education", "category", "cms.category", "category_links"),
            options={"db_table": "cms_education_categories"},
        ),
        migrations.CreateModel(
            name="EducationMedia",
            fields=link_fields("education", "cms.education", "media", "cms.media", "gallery_links"),
            options={"db_table": "cms_education_media"},
        ),
        migrations.AddConstraint(
            model_name="newstag",
            constraint=models.UniqueConstraint(fields=("news", "tag"), name="uq_news_tag"),
        ),
        migrations.AddConstraint(
            model_name="newscategory",
            constraint=models.UniqueConstraint(fields=("news", "category"), name="uq_news_category"),
        ),
        migrations.AddConstraint(
            model_name="newsmedia",
            constraint=models.UniqueConstraint(fields=("news", "media"), name="uq_news_media"),
        ),
        migrations.AddConstraint(
            model_name="educationtag",
            constraint=models.UniqueConstraint(fields=("education", "tag"), name="uq_education_tag"),
        ),
        migrations.AddConstraint(
            model_name="educationcategory",
            constraint=models.UniqueConstraint(fields=("education", "category"), name="uq_education_category"),
        ),
        migrations.AddConstraint(
            model_name="educationmedia",
            constraint=models.UniqueConstraint(fields=("education", "media"), name="uq_education_media"),
        ),
    ]
