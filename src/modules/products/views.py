"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes. The view never swallows generic exceptions.
"""

from __future__ import annotations

from django.conf import settings
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import CreateBundleDTO, CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import (
    BundleError,
    CycleDetected,
    ProductInUse,
    ProductNotFound,
    SourceNotFound,
)
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService


def _not_found(exc: ProductNotFound) -> Response:
    return Response(
        {"detail": str(exc), "code": "not_found"},
        status=status.HTTP_404_NOT_FOUND,
    )


def _invalid(exc: Exception) -> Response:
    return Response(
        {"detail": str(exc), "code": "invalid"},
        status=status.HTTP_400_BAD_REQUEST,
    )


class ProductViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for Product CRUD operations and bundle creation.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    filterset_class = ProductFilter
    search_fields = ["name"]
    ordering_fields = ["id", "name", "price"]
    ordering = ["id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(
            repository=ProductDjangoRepository(),
            max_bundle_depth=settings.PRODUCT_BUNDLE_MAX_DEPTH,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_products()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /products/{pk}"""
        try:
            product = self._service.get_product(int(pk))
        except ProductNotFound as exc:
            return _not_found(exc)
        serializer = ProductSerializer(product)
        return Response(serializer.data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /products"""
        data = request.data
        if not isinstance(data, dict):
            return _invalid(ValueError("Expected a JSON object."))

        try:
            dto = CreateProductDTO(
                name=data.get("name") or "",
                price=data.get("price", 0.0),
            )
        except (PydanticValidationError, ValueError) as exc:
            return _invalid(exc)

        product = self._service.create_product(dto)
        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /products/{pk}"""
        data = request.data
        if not isinstance(data, dict):
            return _invalid(ValueError("Expected a JSON object."))

        try:
            dto = UpdateProductDTO(
                name=data.get("name"),
                price=data.get("price"),
            )
        except (PydanticValidationError, ValueError) as exc:
            return _invalid(exc)

        try:
            product = self._service.update_product(int(pk), dto)
        except ProductNotFound as exc:
            return _not_found(exc)

        out = ProductSerializer(product)
        return Response(out.data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /products/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /products/{pk}"""
        try:
            self._service.delete_product(int(pk))
        except ProductNotFound as exc:
            return _not_found(exc)
        except ProductInUse as exc:
            return Response(
                {"detail": str(exc), "code": "product_in_use"},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Bundles
    # ------------------------------------------------------------------

    @action(detail=False, methods=["post"], url_path="bundle")
    def bundle(self, request: Request) -> Response:
        """POST /products/bundle

        Accepts an ordered JSON list of source product ids.
        """
        try:
            dto = CreateBundleDTO(source_ids=request.data)
        except (PydanticValidationError, ValueError) as exc:
            return _invalid(exc)

        try:
            product = self._service.create_bundle(dto)
        except BundleError as exc:
            body = {"detail": str(exc), "code": exc.code}
            if isinstance(exc, SourceNotFound):
                body["missing_ids"] = exc.missing_ids
            elif isinstance(exc, CycleDetected):
                body["cycle"] = exc.path
            return Response(body, status=status.HTTP_400_BAD_REQUEST)

        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)
