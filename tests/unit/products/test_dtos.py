"""Unit tests for Product DTOs.

Covers:
- CreateProductDTO / UpdateProductDTO: defaults, finite non-negative price, immutability.
- CreateBundleDTO: integer ids only, order and duplicates preserved.
- ProductOutputDTO: nested sources, guard against stored cycles, deep chains.
"""

from __future__ import annotations

import sys

import pytest
from pydantic import ValidationError

from modules.products.dtos import (
    CreateBundleDTO,
    CreateProductDTO,
    ProductOutputDTO,
    UpdateProductDTO,
)
from modules.products.models import Product, ProductSource

pytestmark = pytest.mark.unit


# ===========================================================================
# CreateProductDTO
# ===========================================================================


class TestCreateProductDTO:
    def test_valid(self):
        dto = CreateProductDTO(name="Clavier", price=45.0)
        assert dto.name == "Clavier"
        assert dto.price == 45.0

    def test_defaults(self):
        dto = CreateProductDTO()
        assert dto.name == ""
        assert dto.price == 0.0

    def test_integer_price_becomes_float(self):
        assert CreateProductDTO(price=45).price == 45.0

    def test_negative_price_raises(self):
        with pytest.raises(ValidationError, match="Price cannot be negative"):
            CreateProductDTO(name="Bad", price=-0.01)

    def test_non_numeric_price_raises(self):
        with pytest.raises(ValidationError):
            CreateProductDTO(name="Bad", price="cheap")

    @pytest.mark.parametrize("price", [float("inf"), float("nan"), "inf", "-inf", "NaN"])
    def test_non_finite_price_raises(self, price):
        with pytest.raises(ValidationError):
            CreateProductDTO(name="Bad", price=price)

    def test_frozen(self):
        dto = CreateProductDTO(name="Clavier", price=45.0)
        with pytest.raises(ValidationError):
            dto.name = "Other"


# ===========================================================================
# UpdateProductDTO
# ===========================================================================


class TestUpdateProductDTO:
    def test_all_optional(self):
        dto = UpdateProductDTO()
        assert dto.name is None
        assert dto.price is None

    def test_negative_price_raises(self):
        with pytest.raises(ValidationError, match="Price cannot be negative"):
            UpdateProductDTO(price=-5)

    def test_infinite_price_raises(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(price="inf")

    def test_sources_are_not_a_field(self):
        assert "sources" not in UpdateProductDTO.model_fields


# ===========================================================================
# CreateBundleDTO
# ===========================================================================


class TestCreateBundleDTO:
    def test_keeps_order_and_duplicates(self):
        dto = CreateBundleDTO(source_ids=[3, 1, 3])
        assert dto.source_ids == [3, 1, 3]

    def test_empty_list_is_accepted_here(self):
        assert CreateBundleDTO(source_ids=[]).source_ids == []

    def test_string_ids_rejected(self):
        with pytest.raises(ValidationError):
            CreateBundleDTO(source_ids=["1"])

    def test_object_body_rejected(self):
        with pytest.raises(ValidationError):
            CreateBundleDTO(source_ids={"ids": [1]})


# ===========================================================================
# ProductOutputDTO
# ===========================================================================


class TestProductOutputDTO:
    def test_leaf(self):
        product = Product.objects.create(name="Souris", price=25.0)
        dto = ProductOutputDTO.from_entity(product)
        assert dto.model_dump() == {
            "id": product.id,
            "name": "Souris",
            "price": 25.0,
            "sources": [],
        }

    def test_nested_sources_by_value(self):
        mouse = Product.objects.create(name="Souris", price=25.0)
        keyboard = Product.objects.create(name="Clavier", price=45.0)
        desk = Product.objects.create(name="Souris + Clavier", price=70.0)
        ProductSource.objects.create(bundle=desk, source=mouse, position=0)
        ProductSource.objects.create(bundle=desk, source=keyboard, position=1)
        top = Product.objects.create(name="Souris + Clavier", price=70.0)
        ProductSource.objects.create(bundle=top, source=desk, position=0)

        data = ProductOutputDTO.from_entity(top).model_dump()

        assert [s["id"] for s in data["sources"]] == [desk.id]
        nested = data["sources"][0]["sources"]
        assert [s["name"] for s in nested] == ["Souris", "Clavier"]
        assert nested[0]["sources"] == []

    def test_stored_cycle_is_cut(self):
        a = Product.objects.create(name="A", price=1.0)
        b = Product.objects.create(name="B", price=2.0)
        ProductSource.objects.create(bundle=a, source=b, position=0)
        ProductSource.objects.create(bundle=b, source=a, position=0)

        data = ProductOutputDTO.from_entity(a).model_dump()

        inner = data["sources"][0]
        assert inner["id"] == b.id
        assert inner["sources"] == [
            {"id": a.id, "name": "A", "price": 1.0, "sources": []}
        ]

    def test_chain_deeper_than_recursion_limit(self):
        depth = sys.getrecursionlimit() + 200
        products = Product.objects.bulk_create(
            Product(name=f"L{level}", price=1.0) for level in range(depth + 1)
        )
        ProductSource.objects.bulk_create(
            ProductSource(bundle=parent, source=child, position=0)
            for child, parent in zip(products, products[1:])
        )

        dto = ProductOutputDTO.from_entity(products[-1])

        levels = 0
        node = dto
        while node.sources:
            node = node.sources[0]
            levels += 1
        assert levels == depth
        assert node.name == "L0"
