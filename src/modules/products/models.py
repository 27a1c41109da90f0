"""Product model and its ordered source links.

A product with no source links is a *leaf*; a product with one or more
links is a *bundle* composed of the linked products.

Rules implemented here:
- Sources keep the order they were given in (``ProductSource.position``).
- A source cannot be removed while a bundle still links to it
  (``on_delete=PROTECT``).  Removing a bundle drops its own links.
- Price cannot be negative.
"""

from __future__ import annotations

from typing import List

import structlog

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """Product aggregate root.

    ``sources`` is exposed through ``ordered_sources()`` rather than a
    ``ManyToManyField`` so the link order is explicit and stable.
    """

    name = models.CharField(max_length=255, blank=True, default="")
    price = models.FloatField(default=0.0, validators=[MinValueValidator(0.0)])

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def ordered_sources(self) -> List[Product]:
        """Return the linked source products in their stored order.

        Uses the ``source_links__source`` prefetch cache when present.
        """
        if self.pk is None:
            return []
        return [link.source for link in self.source_links.all()]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=self.id,
                name=self.name,
            )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"#{self.id} {self.name}"


class ProductSource(models.Model):
    """Directed edge ``bundle -> source`` of the product composition graph."""

    bundle = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="source_links",
    )
    source = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="bundle_links",
    )
    position = models.PositiveIntegerField()

    class Meta:
        db_table = "product_sources"
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(
                fields=["bundle", "source"],
                name="product_sources_unique_pair",
            ),
            models.UniqueConstraint(
                fields=["bundle", "position"],
                name="product_sources_unique_position",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.bundle_id} -> {self.source_id} (#{self.position})"
