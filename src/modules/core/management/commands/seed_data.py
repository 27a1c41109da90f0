from __future__ import annotations

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.products.dtos import CreateBundleDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

SEED_PRODUCTS = [
    ("Souris", 25.0),
    ("Clavier", 45.0),
    ("Écran 27 pouces", 180.0),
    ("Tapis de souris", 9.9),
    ("Câble HDMI", 12.5),
]

SEED_BUNDLES = [
    ("Souris", "Clavier"),
    ("Souris", "Clavier", "Écran 27 pouces"),
]


class Command(BaseCommand):
    help = "Seed database with demo products and bundles."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        products = self._seed_products()
        bundles_created = self._seed_bundles(products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"products={len(products)}, "
                f"bundles={bundles_created}"
            )
        )

    def _seed_products(self) -> dict[str, Product]:
        self.stdout.write("Creating products...")
        products: dict[str, Product] = {}
        for name, price in SEED_PRODUCTS:
            product = (
                Product.objects.filter(name=name, source_links__isnull=True).first()
                or Product.objects.create(name=name, price=price)
            )
            products[name] = product
        return products

    def _seed_bundles(self, products: dict[str, Product]) -> int:
        self.stdout.write("Creating bundles...")
        service = ProductService(repository=ProductDjangoRepository())
        created = 0
        for names in SEED_BUNDLES:
            bundle_name = " + ".join(names)
            if Product.objects.filter(name=bundle_name).exists():
                continue
            dto = CreateBundleDTO(source_ids=[products[name].id for name in names])
            service.create_bundle(dto)
            created += 1
        return created
