from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.products.models import Product

SEED_PRODUCTS = [
    ("KB01", "Mechanical Keyboard", 89.90, "Tenkeyless, brown switches"),
    ("MS01", "Wireless Mouse", 29.50, "2.4 GHz, 1600 DPI"),
    ("MN27", "27in Monitor", 249.00, "1440p IPS panel"),
    ("HS01", "USB Headset", 45.00, ""),
    ("WC01", "HD Webcam", 39.99, "1080p with privacy shutter"),
    ("DK01", "USB-C Dock", 119.00, "Dual display, 100 W passthrough"),
]


class Command(BaseCommand):
    help = "Seed database with demo products and an admin user."

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        products_created = self._seed_products()

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"products={products_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        if User.objects.filter(username="admin").exists():
            return 0
        User.objects.create_superuser("admin", password="admin123")
        return 1

    def _seed_products(self) -> int:
        created = 0
        for code, name, price, description in SEED_PRODUCTS:
            _, was_created = Product.objects.alive().get_or_create(
                code=code,
                defaults={
                    "name": name,
                    "price": price,
                    "description": description,
                    "is_active": True,
                },
            )
            created += int(was_created)
        return created
