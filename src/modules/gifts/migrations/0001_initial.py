from decimal import Decimal

import django.core.validators
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Gift",
            fields=[
                ("id", models.UUIDField(default=uuid6.uuid7, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, default=None, null=True)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField()),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                ("images", models.JSONField(default=list)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("toys", "Toys"),
                            ("books", "Books"),
                            ("clothes", "Clothes"),
                            ("electronics", "Electronics"),
                            ("art", "Art"),
                            ("outdoors", "Outdoors"),
                            ("accessories", "Accessories"),
                            ("educational", "Educational"),
                            ("other", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                ("age_min", models.PositiveSmallIntegerField()),
                ("age_max", models.PositiveSmallIntegerField()),
                (
                    "gender",
                    models.CharField(
                        choices=[("boy", "Boy"), ("girl", "Girl"), ("unisex", "Unisex")],
                        default="unisex",
                        max_length=10,
                    ),
                ),
                ("tags", models.JSONField(blank=True, default=list)),
                ("in_stock", models.BooleanField(default=False)),
                ("stock_count", models.PositiveIntegerField(default=0)),
                (
                    "estimated_delivery_time",
                    models.PositiveSmallIntegerField(
                        default=60,
                        validators=[django.core.validators.MaxValueValidator(60)],
                    ),
                ),
                (
                    "rating",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=3,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("5")),
                        ],
                    ),
                ),
                ("is_popular", models.BooleanField(default=False)),
                (
                    "discount",
                    models.PositiveSmallIntegerField(
                        default=0,
                        validators=[django.core.validators.MaxValueValidator(100)],
                    ),
                ),
            ],
            options={
                "db_table": "gifts",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["gender", "age_min", "age_max"], name="gifts_gender_age_idx"),
                    models.Index(fields=["category"], name="gifts_category_idx"),
                    models.Index(fields=["-is_popular"], name="gifts_popular_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(price__gte=0),
                        name="gifts_price_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(age_max__gte=models.F("age_min")),
                        name="gifts_age_range_ordered",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(estimated_delivery_time__lte=60),
                        name="gifts_delivery_within_hour",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(in_stock=True, stock_count__gt=0)
                        | models.Q(in_stock=False, stock_count=0),
                        name="gifts_in_stock_matches_count",
                    ),
                ],
            },
        ),
    ]
