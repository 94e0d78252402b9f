from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from config.container import get_container
from modules.core.exceptions import DomainError
from modules.gifts.models import Gift, GiftCategory, GiftGender

CATALOG = [
    ("Wooden Train Set", GiftCategory.TOYS, GiftGender.UNISEX, 3, 7, Decimal("34.99"), True),
    ("Dinosaur Encyclopedia", GiftCategory.BOOKS, GiftGender.UNISEX, 6, 12, Decimal("19.50"), True),
    ("Princess Dress-up Kit", GiftCategory.CLOTHES, GiftGender.GIRL, 3, 8, Decimal("27.00"), False),
    ("Remote Control Racer", GiftCategory.ELECTRONICS, GiftGender.BOY, 7, 14, Decimal("49.90"), True),
    ("Watercolor Starter Box", GiftCategory.ART, GiftGender.UNISEX, 5, 15, Decimal("22.75"), False),
    ("Junior Camping Tent", GiftCategory.OUTDOORS, GiftGender.UNISEX, 6, 13, Decimal("59.00"), False),
    ("Friendship Bracelet Kit", GiftCategory.ACCESSORIES, GiftGender.GIRL, 7, 13, Decimal("12.99"), True),
    ("Robot Coding Kit", GiftCategory.EDUCATIONAL, GiftGender.UNISEX, 9, 16, Decimal("74.00"), True),
    ("Plush Unicorn", GiftCategory.TOYS, GiftGender.GIRL, 0, 5, Decimal("15.00"), False),
    ("Soccer Ball", GiftCategory.OUTDOORS, GiftGender.BOY, 5, 16, Decimal("18.00"), False),
]


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        customer = self._seed_users()
        gifts = self._seed_gifts()
        orders_created = self._seed_orders(customer, gifts)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: gifts={len(gifts)}, orders={orders_created}"
            )
        )

    def _seed_users(self):
        User = get_user_model()
        if not User.objects.filter(email="admin@example.com").exists():
            User.objects.create_superuser(
                "admin@example.com", password="admin123", name="Admin", phone="5550000001"
            )
        customer = User.objects.filter(email="parent@example.com").first()
        if customer is None:
            customer = User.objects.create_user(
                "parent@example.com", password="parent123", name="Pat Parent", phone="5550000002"
            )
        return customer

    def _seed_gifts(self) -> list[Gift]:
        self.stdout.write("Creating gifts...")
        gifts: list[Gift] = []
        for name, category, gender, age_min, age_max, price, popular in CATALOG:
            gift, _ = Gift.objects.get_or_create(
                name=name,
                defaults={
                    "description": f"{name}, delivered within the hour.",
                    "category": category,
                    "gender": gender,
                    "age_min": age_min,
                    "age_max": age_max,
                    "price": price,
                    "images": [f"https://images.example.com/gifts/{category}.png"],
                    "tags": [category, gender],
                    "stock_count": random.randint(5, 50),
                    "estimated_delivery_time": random.choice([30, 45, 60]),
                    "rating": Decimal(random.randint(30, 50)) / 10,
                    "is_popular": popular,
                },
            )
            gifts.append(gift)
        self.stdout.write(self.style.SUCCESS("Creating gifts... Done!"))
        return gifts

    def _seed_orders(self, customer, gifts: list[Gift]) -> int:
        self.stdout.write("Creating orders...")
        placement = get_container().placement
        created = 0
        for gift in random.sample(gifts, k=min(3, len(gifts))):
            quantity = random.randint(1, 2)
            delivery_fee, tax = Decimal("4.99"), Decimal("1.50")
            payload = {
                "recipient": {"name": "Sam", "age": gift.age_min + 1, "gender": "unisex", "occasion": "Birthday"},
                "items": [{"gift": str(gift.id), "quantity": quantity, "price": str(gift.price)}],
                "deliveryAddress": {"address": "12 Elm Street", "city": "Springfield", "state": "IL", "zipCode": "62701"},
                "paymentInfo": {"method": "cash_on_delivery"},
                "deliveryFee": str(delivery_fee),
                "tax": str(tax),
                "totalAmount": str(gift.price * quantity + delivery_fee + tax),
            }
            try:
                placement.place_order(str(customer.pk), payload)
            except DomainError as exc:
                self.stdout.write(self.style.WARNING(f"Skipped order: {exc.message}"))
                continue
            created += 1
        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return created
