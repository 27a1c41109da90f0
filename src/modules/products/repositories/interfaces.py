"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups the bundle builder
needs: the adjacency of the composition graph, reverse references for
delete protection, and atomic persistence of a bundle with its links.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Dict, List, Sequence

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.bundles import BundleDraft
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_source_ids(self, ids: Sequence[int]) -> Dict[int, List[int]]:
        """Map each id in ``ids`` to its source ids, in stored order.

        Leaves and unknown ids may be omitted from the result.
        """

    @abstractmethod
    def is_referenced(self, id: int) -> bool:
        """Return ``True`` when some bundle lists ``id`` among its sources."""

    @abstractmethod
    def save_bundle(self, draft: BundleDraft) -> Product:
        """Persist a new bundle together with its ordered source links."""
