# Generated migration for Site and Block content models

import django.core.validators
from django.db import migrations, models

import cms.validators


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Site",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(default="My site", max_length=200)),
                ("subtitle", models.CharField(blank=True, max_length=300)),
                (
                    "logo",
                    models.CharField(
                        blank=True,
                        help_text="Path or URL of the logo image",
                        max_length=500,
                    ),
                ),
                (
                    "background_mode",
                    models.CharField(
                        choices=[
                            ("static", "Static image"),
                            ("slideshow", "Slideshow"),
                            ("video", "Video"),
                        ],
                        default="static",
                        max_length=20,
                    ),
                ),
                (
                    "background_media",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Image paths (static/slideshow) or video path (video)",
                    ),
                ),
                (
                    "slideshow_duration",
                    models.PositiveIntegerField(
                        default=5,
                        help_text="Seconds per slide",
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(3600),
                        ],
                    ),
                ),
                ("custom_css", models.TextField(blank=True)),
            ],
            options={
                "verbose_name": "Site",
                "verbose_name_plural": "Site",
            },
        ),
        migrations.CreateModel(
            name="Block",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "type",
                    models.CharField(
                        db_index=True,
                        max_length=64,
                        validators=[cms.validators.validate_block_type],
                    ),
                ),
                ("data", models.JSONField(blank=True, default=dict)),
                ("sort", models.IntegerField(blank=True, db_index=True, null=True)),
                ("is_visible", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Block",
                "verbose_name_plural": "Blocks",
                "ordering": ["sort", "id"],
            },
        ),
    ]
