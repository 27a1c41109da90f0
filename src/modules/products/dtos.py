"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for leaf product creation.
- ``UpdateProductDTO``: input for partial name/price updates.
- ``CreateBundleDTO``: ordered source ids for a new bundle.
- ``ProductOutputDTO``: output with the nested source tree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel, ConfigDict, FiniteFloat, StrictInt, field_validator

if TYPE_CHECKING:
    from modules.products.models import Product


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for leaf product creation requests.

    ``name`` may be empty; ``price`` must be finite and not negative.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    price: FiniteFloat = 0.0

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Price cannot be negative.")
        return v


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied fields will be updated.
    Sources are not updatable.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    price: Optional[FiniteFloat] = None

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("Price cannot be negative.")
        return v


class CreateBundleDTO(BaseModel):
    """Ordered list of source product ids.

    Duplicates and unknown ids are left for the bundle builder to judge.
    """

    model_config = ConfigDict(frozen=True)

    source_ids: List[StrictInt]


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int]
    name: str
    price: float
    sources: List[ProductOutputDTO] = []

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO, embedding every source by value.

        The tree is assembled with an explicit stack, children before
        parents, so nesting depth is not limited by the call stack.  A
        source already on the current path is emitted without its own
        sources so a corrupted graph cannot loop forever.
        """
        # (product, ids on the path to it, sources left to visit, finished children)
        stack = [(product, frozenset({product.pk}), iter(product.ordered_sources()), [])]
        while True:
            current, path, pending, children = stack[-1]
            source = next(pending, None)
            if source is None:
                node = cls(
                    id=current.pk,
                    name=current.name,
                    price=current.price,
                    sources=children,
                )
                stack.pop()
                if not stack:
                    return node
                stack[-1][3].append(node)
            elif source.pk in path:
                children.append(cls(id=source.pk, name=source.name, price=source.price))
            else:
                stack.append(
                    (source, path | {source.pk}, iter(source.ordered_sources()), [])
                )
