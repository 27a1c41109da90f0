"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository`` and bundle
validation to ``BundleBuilder``.

Rules enforced here:
- Only name and price change on update; sources are fixed at creation.
- A product that is a source of a bundle cannot be deleted.
- A bundle is persisted only after all of its sources resolved and the
  composition was found acyclic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import structlog
from django.db import transaction

from modules.products.bundles import DEFAULT_MAX_DEPTH, BundleBuilder
from modules.products.exceptions import ProductInUse, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateBundleDTO,
        CreateProductDTO,
        UpdateProductDTO,
    )
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(
        self, repository: IProductRepository, max_bundle_depth: int = DEFAULT_MAX_DEPTH
    ) -> None:
        self._repo = repository
        self._bundles = BundleBuilder(repository, max_depth=max_bundle_depth)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new leaf product."""
        product = Product(name=dto.name, price=dto.price)
        product = self._repo.save(product)
        logger.info("product.created", product_id=product.id)
        return product

    @transaction.atomic
    def create_bundle(self, dto: CreateBundleDTO) -> Product:
        """Build a bundle from ``dto.source_ids`` and persist it.

        Raises:
            SourceNotFound, CycleDetected, SourceGraphTooDeep, PriceOverflow:
                propagated from ``BundleBuilder.build``; nothing is saved.
        """
        draft = self._bundles.build(dto.source_ids)
        bundle = self._repo.save_bundle(draft)
        logger.info(
            "bundle.created",
            product_id=bundle.id,
            source_ids=draft.source_ids,
        )
        return bundle

    @transaction.atomic
    def update_product(self, id: int, dto: UpdateProductDTO) -> Product:
        """Update name and/or price of an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(id)

        log = logger.bind(product_id=id)

        for field in ("name", "price"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        product = self._repo.save(product)
        log.info("product.updated")
        return product

    @transaction.atomic
    def delete_product(self, id: int) -> None:
        """Delete a product that no bundle depends on.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductInUse: if a bundle lists the product among its sources.
        """
        if not self._repo.exists(id):
            raise ProductNotFound(id)
        if self._repo.is_referenced(id):
            logger.warning("product.delete_blocked", product_id=id)
            raise ProductInUse(id)
        self._repo.delete(id)
        logger.info("product.deleted", product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self) -> Iterable[Product]:
        """Return every product; the API layer narrows it with request filters."""
        return self._repo.list()

    def get_product(self, id: int) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(id)
        logger.info("product.retrieved", product_id=id)
        return product
