"""Bundle builder: turns source product ids into an unsaved bundle.

The builder only reads from the repository.  It resolves the requested
ids, rejects unknown ids and cyclic compositions, and computes the
derived name and price.  Persisting the resulting ``BundleDraft`` is the
caller's job (see ``ProductService.create_bundle``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence, Tuple

import structlog

from modules.products.exceptions import CycleDetected, PriceOverflow, SourceNotFound
from modules.products.graph import find_cycle

if TYPE_CHECKING:
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

NAME_SEPARATOR = " + "
DEFAULT_MAX_DEPTH = 100
# Nested output is one dict per level; keep it well inside interpreter
# and pydantic-core recursion limits.
MAX_SUPPORTED_DEPTH = 200


@dataclass(frozen=True)
class BundleDraft:
    """A validated, not yet persisted bundle."""

    name: str
    price: float
    sources: Tuple[Product, ...]

    @property
    def source_ids(self) -> List[int]:
        return [source.id for source in self.sources]


class BundleBuilder:
    """Builds bundle drafts against an ``IProductRepository``."""

    def __init__(
        self, repository: IProductRepository, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> None:
        if not 1 <= max_depth <= MAX_SUPPORTED_DEPTH:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_SUPPORTED_DEPTH}, got {max_depth}."
            )
        self._repo = repository
        self._max_depth = max_depth

    def build(self, source_ids: Sequence[int]) -> BundleDraft:
        """Resolve, validate and aggregate ``source_ids``.

        Repeated ids count once; the first occurrence fixes the position.
        An empty list yields an empty name and a price of 0.0.

        Raises:
            SourceNotFound: if any id has no stored product.
            CycleDetected: if a source reaches one of the sources.
            SourceGraphTooDeep: if the sources nest beyond ``max_depth``.
            PriceOverflow: if the summed price is not finite.
        """
        distinct_ids = list(dict.fromkeys(source_ids))
        log = logger.bind(source_ids=distinct_ids)

        found = self._repo.get_many(distinct_ids)
        if len(found) != len(distinct_ids):
            missing = [i for i in distinct_ids if i not in found]
            log.warning("bundle.source_not_found", missing_ids=missing)
            raise SourceNotFound(missing)
        sources = tuple(found[i] for i in distinct_ids)

        cycle = find_cycle(distinct_ids, self._repo.get_source_ids, self._max_depth)
        if cycle is not None:
            log.warning("bundle.cycle_detected", cycle=cycle)
            raise CycleDetected(cycle)

        price = sum((source.price for source in sources), 0.0)
        if not math.isfinite(price):
            log.warning("bundle.price_overflow")
            raise PriceOverflow()

        draft = BundleDraft(
            name=NAME_SEPARATOR.join(source.name for source in sources),
            price=price,
            sources=sources,
        )
        log.info("bundle.built", name=draft.name, price=draft.price)
        return draft
