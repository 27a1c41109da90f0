"""Product domain exceptions.

Raised by the Service Layer and the bundle builder when business rules
are violated.  The API layer (Views) catches these and translates them
into appropriate HTTP responses.
"""

from __future__ import annotations

from typing import Iterable, List


class ProductNotFound(Exception):
    """The requested product does not exist."""

    def __init__(self, product_id) -> None:
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found.")


class ProductInUse(Exception):
    """The product is a source of at least one bundle and cannot be deleted."""

    def __init__(self, product_id) -> None:
        self.product_id = product_id
        super().__init__(
            f"Product {product_id} is a source of an existing bundle."
        )


# ---------------------------------------------------------------------------
# Bundle creation
# ---------------------------------------------------------------------------


class BundleError(Exception):
    """Base class for rejected bundle requests."""

    code = "invalid_bundle"


class SourceNotFound(BundleError):
    """One or more requested source ids have no stored product."""

    code = "source_not_found"

    def __init__(self, missing_ids: Iterable[int]) -> None:
        self.missing_ids: List[int] = list(missing_ids)
        ids = ", ".join(str(i) for i in self.missing_ids)
        super().__init__(f"Source products not found: {ids}.")


class CycleDetected(BundleError):
    """A requested source transitively references one of the requested sources.

    ``path`` lists the ids walked from the first source to the one it
    reaches, e.g. ``[2, 1, 2]``.
    """

    code = "cycle_detected"

    def __init__(self, path: Iterable[int]) -> None:
        self.path: List[int] = list(path)
        chain = " -> ".join(str(i) for i in self.path)
        super().__init__(f"Cycle detected in source products: {chain}.")


class SourceGraphTooDeep(BundleError):
    """The source graph below the requested sources exceeds the depth limit."""

    code = "graph_too_deep"

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"Source products are nested deeper than {max_depth} levels."
        )


class PriceOverflow(BundleError):
    """The summed price of the sources is not a finite number."""

    code = "price_overflow"

    def __init__(self) -> None:
        super().__init__("The combined price of the source products is too large.")
