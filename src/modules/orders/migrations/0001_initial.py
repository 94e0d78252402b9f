from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid6
from django.conf import settings
from django.db import migrations, models

MONEY_VALIDATORS = [django.core.validators.MinValueValidator(Decimal("0"))]
STATUS_CHOICES = [
    ("pending", "Pending"),
    ("confirmed", "Confirmed"),
    ("preparing", "Preparing"),
    ("out_for_delivery", "Out for delivery"),
    ("delivered", "Delivered"),
    ("canceled", "Canceled"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
        ("gifts", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid6.uuid7, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("recipient_name", models.CharField(max_length=255)),
                ("recipient_age", models.PositiveSmallIntegerField()),
                (
                    "recipient_gender",
                    models.CharField(
                        choices=[("boy", "Boy"), ("girl", "Girl"), ("unisex", "Unisex")],
                        max_length=10,
                    ),
                ),
                ("recipient_occasion", models.CharField(blank=True, default="", max_length=255)),
                ("address", models.CharField(max_length=255)),
                ("city", models.CharField(max_length=100)),
                ("state", models.CharField(max_length=100)),
                (
                    "zip_code",
                    models.CharField(
                        max_length=6,
                        validators=[django.core.validators.RegexValidator("^\\d{5,6}$", "Valid ZIP code required")],
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        choices=[
                            ("credit_card", "Credit card"),
                            ("debit_card", "Debit card"),
                            ("upi", "UPI"),
                            ("wallet", "Wallet"),
                            ("cash_on_delivery", "Cash on delivery"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("completed", "Completed"),
                            ("failed", "Failed"),
                            ("refunded", "Refunded"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("payment_transaction_id", models.CharField(blank=True, default="", max_length=255)),
                ("status", models.CharField(choices=STATUS_CHOICES, default="pending", max_length=20)),
                ("delivery_time", models.DateTimeField()),
                ("special_instructions", models.TextField(blank=True, default="")),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=10, validators=MONEY_VALIDATORS)),
                ("delivery_fee", models.DecimalField(decimal_places=2, max_digits=10, validators=MONEY_VALIDATORS)),
                ("tax", models.DecimalField(decimal_places=2, max_digits=10, validators=MONEY_VALIDATORS)),
                (
                    "discount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=10,
                        validators=MONEY_VALIDATORS,
                    ),
                ),
                ("partner_name", models.CharField(blank=True, default="", max_length=255)),
                (
                    "partner_phone",
                    models.CharField(
                        blank=True,
                        default="",
                        max_length=10,
                        validators=[django.core.validators.RegexValidator("^\\d{10}$", "Phone number must be 10 digits")],
                    ),
                ),
                ("partner_lat", models.FloatField(blank=True, null=True)),
                ("partner_lng", models.FloatField(blank=True, null=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "-created_at"], name="orders_user_created_idx"),
                    models.Index(fields=["status"], name="orders_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(total_amount__gte=0)
                        & models.Q(delivery_fee__gte=0)
                        & models.Q(tax__gte=0)
                        & models.Q(discount__gte=0),
                        name="orders_amounts_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.UUIDField(default=uuid6.uuid7, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("quantity", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("price", models.DecimalField(decimal_places=2, max_digits=10, validators=MONEY_VALIDATORS)),
                (
                    "gift",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="order_items",
                        to="gifts.gift",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_items",
                "ordering": ["created_at", "id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(quantity__gte=1),
                        name="order_items_quantity_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(price__gte=0),
                        name="order_items_price_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="TrackingEvent",
            fields=[
                ("id", models.UUIDField(default=uuid6.uuid7, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("status", models.CharField(choices=STATUS_CHOICES, max_length=20)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tracking",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_tracking_events",
                "ordering": ["timestamp", "id"],
                "indexes": [
                    models.Index(fields=["order", "timestamp"], name="tracking_order_ts_idx"),
                ],
            },
        ),
    ]
