"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence

import structlog

from django.db import connection, models, transaction

from modules.products.models import Product, ProductSource
from modules.products.repositories.interfaces import IProductRepository

if TYPE_CHECKING:
    from modules.products.bundles import BundleDraft

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    @staticmethod
    def _queryset() -> "models.QuerySet[Product]":
        return Product.objects.prefetch_related("source_links__source")

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or non-numeric IDs.
        """
        try:
            return self._queryset().filter(id=id).first()
        except (ValueError, TypeError):
            return None

    def get_many(self, ids: Iterable[int]) -> Dict[int, Product]:
        """Fetch products by id in one query.

        Ids outside the primary key column range cannot be stored, so they
        are left out of the query and come back absent like any unknown id.
        """
        low, high = connection.ops.integer_field_range(
            Product._meta.pk.get_internal_type()
        )
        return self._queryset().in_bulk([i for i in ids if low <= i <= high])

    def list(self) -> "models.QuerySet[Product]":
        """Return every product with its source links prefetched.

        Request filters are applied on top of this queryset by the view.
        """
        return self._queryset()

    def exists(self, id: int) -> bool:
        return Product.objects.filter(id=id).exists()

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=entity.id)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Delete a product (and its own source links) by ID.

        Returns ``True`` if the product was found and deleted,
        ``False`` if no product exists with the given ID.
        """
        deleted, _ = Product.objects.filter(id=id).delete()
        if not deleted:
            return False
        logger.info("product.deleted", product_id=id)
        return True

    # ------------------------------------------------------------------
    # Composition graph
    # ------------------------------------------------------------------

    def get_source_ids(self, ids: Sequence[int]) -> Dict[int, List[int]]:
        rows = (
            ProductSource.objects.filter(bundle_id__in=list(ids))
            .order_by("bundle_id", "position")
            .values_list("bundle_id", "source_id")
        )
        adjacency: Dict[int, List[int]] = {}
        for bundle_id, source_id in rows:
            adjacency.setdefault(bundle_id, []).append(source_id)
        return adjacency

    def is_referenced(self, id: int) -> bool:
        return ProductSource.objects.filter(source_id=id).exists()

    @transaction.atomic
    def save_bundle(self, draft: BundleDraft) -> Product:
        """Insert the bundle row, then one link per source in draft order."""
        bundle = Product(name=draft.name, price=draft.price)
        bundle.save()
        ProductSource.objects.bulk_create(
            ProductSource(bundle=bundle, source=source, position=position)
            for position, source in enumerate(draft.sources)
        )
        logger.info(
            "product.bundle_saved",
            product_id=bundle.id,
            source_ids=[source.id for source in draft.sources],
        )
        return self._queryset().get(id=bundle.id)
