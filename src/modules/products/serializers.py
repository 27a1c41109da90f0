"""Product DRF serializers for API output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from typing import Any, Dict, List

from rest_framework import serializers

from modules.products.dtos import ProductOutputDTO
from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource.

    ``sources`` embeds every source product by value, recursively.
    """

    sources = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ["id", "name", "price", "sources"]
        read_only_fields = ["id"]

    def get_sources(self, obj: Product) -> List[Dict[str, Any]]:
        return ProductOutputDTO.from_entity(obj).model_dump()["sources"]
