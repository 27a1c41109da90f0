"""Unit tests for the Product and ProductSource models.

Covers:
- Creation with empty name and default price.
- Non-negative price (application validation + DB constraint).
- Ordered sources.
- Link uniqueness constraints.
- __str__ representation.
"""

from __future__ import annotations

import logging

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from modules.products.models import Product, ProductSource

pytestmark = pytest.mark.unit


class TestProductCreation:
    def test_create_with_empty_name(self):
        p = Product.objects.create(name="", price=45.0)
        p.refresh_from_db()
        assert p.name == ""
        assert p.price == 45.0

    def test_defaults(self):
        p = Product.objects.create()
        assert p.name == ""
        assert p.price == 0.0
        assert p.created_at is not None
        assert p.updated_at is not None

    def test_ids_are_integers(self):
        p = Product.objects.create(name="Souris", price=25.0)
        assert isinstance(p.id, int)

    def test_str(self):
        p = Product.objects.create(name="Souris", price=25.0)
        assert str(p) == f"#{p.id} Souris"


class TestPriceValidation:
    def test_negative_price_fails_full_clean(self):
        with pytest.raises(ValidationError):
            Product(name="Bad", price=-1.0).full_clean()

    def test_zero_price_is_valid(self):
        Product(name="Free", price=0.0).full_clean()

    def test_negative_price_rejected_by_database(self):
        with pytest.raises(IntegrityError):
            Product.objects.create(name="Bad", price=-1.0)


class TestSources:
    def test_leaf_has_no_sources(self):
        p = Product.objects.create(name="Leaf", price=1.0)
        assert p.ordered_sources() == []

    def test_unsaved_product_has_no_sources(self):
        assert Product(name="Draft").ordered_sources() == []

    def test_sources_follow_position(self):
        a = Product.objects.create(name="A", price=1.0)
        b = Product.objects.create(name="B", price=2.0)
        bundle = Product.objects.create(name="B + A", price=3.0)
        ProductSource.objects.create(bundle=bundle, source=a, position=1)
        ProductSource.objects.create(bundle=bundle, source=b, position=0)

        assert bundle.ordered_sources() == [b, a]

    def test_same_source_twice_rejected(self):
        a = Product.objects.create(name="A", price=1.0)
        bundle = Product.objects.create(name="A", price=1.0)
        ProductSource.objects.create(bundle=bundle, source=a, position=0)

        with pytest.raises(IntegrityError):
            ProductSource.objects.create(bundle=bundle, source=a, position=1)

    def test_same_position_twice_rejected(self):
        a = Product.objects.create(name="A", price=1.0)
        b = Product.objects.create(name="B", price=1.0)
        bundle = Product.objects.create(name="A + B", price=2.0)
        ProductSource.objects.create(bundle=bundle, source=a, position=0)

        with pytest.raises(IntegrityError):
            ProductSource.objects.create(bundle=bundle, source=b, position=0)


class TestLogging:
    def test_creation_is_logged(self, caplog):
        with caplog.at_level(logging.INFO):
            p = Product.objects.create(name="Logged", price=1.0)

        assert any(
            "product_created" in record.getMessage() and str(p.id) in record.getMessage()
            for record in caplog.records
        )
