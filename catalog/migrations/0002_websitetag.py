import django.db.models.deletion
from django.db import migrations, models


def populate_tags(apps, schema_editor):
    Website = apps.get_model("catalog", "Website")
    WebsiteTag = apps.get_model("catalog", "WebsiteTag")

    tags = []
    for website in Website.objects.only("id", "technologies", "features").iterator():
        for kind, values in (("technology", website.technologies), ("feature", website.features)):
            for value in dict.fromkeys(str(item) for item in values or []):
                tags.append(WebsiteTag(website_id=website.pk, kind=kind, value=value))
    WebsiteTag.objects.bulk_create(tags, batch_size=500)


class Migration(migrations.Migration):

    dependencies = [
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="WebsiteTag",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "kind",
                    models.CharField(choices=[("technology", "Technology"), ("feature", "Feature")], max_length=20),
                ),
                ("value", models.CharField(max_length=100)),
                (
                    "website",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tags",
                        to="catalog.website",
                    ),
                ),
            ],
            options={
                "db_table": "website_tags",
                "indexes": [models.Index(fields=["kind", "value"], name="website_tag_kind_value_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("website", "kind", "value"), name="unique_website_tag"),
                ],
            },
        ),
        migrations.RunPython(populate_tags, migrations.RunPython.noop),
    ]
